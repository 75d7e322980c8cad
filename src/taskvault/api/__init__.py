"""
HTTP API module for TaskVault
"""
