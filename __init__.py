"""
Eliza Chat - Rule-based dialogue responder
==========================================

A small Eliza-style chatbot: each line of user text is matched against
an ordered table of regular expressions and answered with one of the
matching rule's canned replies. It can be used from:
1. The command line (one-shot or interactive chat)
2. A Textual terminal UI
3. A FastAPI web UI

License: MIT
Version: 1.0.0
"""

__version__ = "1.0.0"
__license__ = "MIT"
