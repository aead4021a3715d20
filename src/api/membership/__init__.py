"""Membership bounded context.

Event membership and capacity consistency: joining, leaving and checking
in to capacity-limited events.
"""
