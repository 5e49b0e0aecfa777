"""
Interactive partition layout for window and door panels.

Lines (mullions) subdivide a rectangular panel into panes. The engine keeps
the layout consistent while lines are drawn, dragged, added and removed.
"""
__version__ = "0.1.0"
