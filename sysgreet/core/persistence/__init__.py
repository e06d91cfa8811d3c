"""
Persistence primitives — the only code that mutates the config path.
"""
