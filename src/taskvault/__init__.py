"""
TaskVault: a multi-user task tracker with encrypted task descriptions
"""

__version__ = "0.1.0"
