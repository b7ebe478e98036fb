"""
Livestock client core: REST access, local state and dashboard statistics
for the livestock management dashboard
"""

__version__ = "0.1.0"
