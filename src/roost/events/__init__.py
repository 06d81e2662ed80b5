"""Events — listener discovery and named-event dispatch.

Listeners are discovered from a directory at startup; triggering an
event calls every listener that handles it, in identifier order.
"""
