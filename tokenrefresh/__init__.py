"""
tokenrefresh - keep OAuth credentials fresh in unattended CI runs
"""

__version__ = "0.1.0"
__logo__ = "🔑"
