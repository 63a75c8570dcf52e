"""
Core profile storage, resolution and dispatch.
"""
