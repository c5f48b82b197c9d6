# Core type aliases for the kont data model.
# Numbers and booleans are plain Python ints and bools; everything else a
# program can produce is one of the classes in kont.types.values.
#
# Naming guidance:
# - Expression: an AST node from kont.ast (what the evaluator consumes).
# - KontValue:  an evaluated runtime value (what continuations receive).

import logging
from typing import Any

# Runtime value alias
KontValue = Any
# Store addresses are plain 0-based integers
Address = int

logging.getLogger(__name__).addHandler(logging.NullHandler())
