"""
The APP layer wires the model into a Qt event loop.
`Store` owns the live snapshot and notifies the host UI through signals.
"""
