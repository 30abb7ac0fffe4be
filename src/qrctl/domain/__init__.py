"""Domain layer — pure value types and validation rules.

Domain modules must never import from services, infrastructure, commands,
or output.
"""
