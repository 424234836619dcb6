"""
Visualization core: math kernel, camera, render queue, pointer interaction and
simulations. Nothing in this package imports Qt.
"""
