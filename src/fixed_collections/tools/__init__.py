"""Development helpers for inspecting ring buffers.

Nothing here is needed at runtime; :mod:`debug` offers opt-in timing and
state dumps that are handy while chasing head/length bookkeeping bugs.
"""
