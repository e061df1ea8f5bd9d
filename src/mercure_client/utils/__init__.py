"""
Utility modules for the Mercure client.
"""
