"""
Entry Point Script (Bootstrap)
==============================
Starts VectorLab straight from a source checkout.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It puts 'src' on 'sys.path' so 'import vectorlab' resolves without an
   editable install.
3. On Windows it sets an explicit AppUserModelID so the taskbar groups the
   window under its own icon instead of python.exe.

Usage:
    $ python run.py [--lesson KEY] [--debug]
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

appid = 'VectorLab.Desktop'  # Arbitrary string
try:
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(appid)
except (AttributeError, ImportError):
    # Not on Windows or ctypes not available
    pass

from vectorlab.main import main

if __name__ == "__main__":
    sys.exit(main())
