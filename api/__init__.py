"""
Employee records REST API.
"""
