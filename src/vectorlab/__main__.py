import sys

from vectorlab.main import main

sys.exit(main())
