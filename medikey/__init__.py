"""
MediKey Backend Application Package

Suppress third-party package warnings that are beyond our control.
"""

import warnings

# passlib still imports the stdlib crypt module on older interpreters
warnings.filterwarnings(
    "ignore",
    message="'crypt' is deprecated.*",
    category=DeprecationWarning,
    module="passlib.utils",
)

__version__ = "1.0.0"
