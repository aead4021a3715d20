"""Membership domain layer."""
