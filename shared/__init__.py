"""
Shared Kernel

Domain exceptions, the date interval value object, the message bus, the
unit of work and the pagination helpers used by every app.
"""
