"""
Interfaces Layer

Entry points into the service.
"""
