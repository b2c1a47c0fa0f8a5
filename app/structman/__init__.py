"""structman - Declarative directory structure reconciliation.

Describe the directories and files an application needs, then let
structman create, verify and repair them on the real filesystem.
"""

__version__ = "0.1.0"
