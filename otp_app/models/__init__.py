"""
Domain models module.

Immutable data structures for zone systems and the fully resolved public
view of training plans and workout templates.
"""
