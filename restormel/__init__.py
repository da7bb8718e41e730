"""
Restormel Audit - Static security audit for JavaScript and TypeScript projects

Walks a project tree and reports:
- Hardcoded secrets and secret-shaped tokens
- Dangerous code-evaluation and markup-injection APIs

Copyright (c) 2026 Restormel Contributors
Licensed under the Apache License 2.0
"""

__version__ = "1.0.0"
__author__ = "restormel-dev"


__all__ = [
    "__version__",
]
