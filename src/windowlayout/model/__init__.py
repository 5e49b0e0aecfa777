"""
The MODEL layer contains pure data structures and layout algorithms.
It has NO knowledge of the GUI (Qt) or the renderer.
It deals with Geometry, Snapping, Drag Propagation and the Pane Grid.
"""
