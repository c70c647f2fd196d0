"""skiller - keep agent skills consistent across every installed coding agent"""

__version__ = "0.1.0"
