"""
AZ fail-away - remove a degraded availability zone from Auto Scaling Groups
and restore it once the zone recovers.
"""

__version__ = "0.1.0"
