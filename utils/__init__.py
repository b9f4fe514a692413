"""
Pure helper functions shared by the planning services.
"""
