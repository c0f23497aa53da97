"""Login gateway - reconciles password, session and OAuth sign-in into one session token"""

__version__ = "1.0.0"
