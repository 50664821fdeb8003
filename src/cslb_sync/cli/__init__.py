"""
Command line interface for cslb-sync.
"""
