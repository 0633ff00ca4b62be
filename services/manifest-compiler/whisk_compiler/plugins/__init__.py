"""Compiler plugins for the OpenWhisk manifest.

Each plugin registers lifecycle hooks with the host and writes one output
section of the service: packages, triggers or rules.
"""

from __future__ import annotations

from whisk_compiler.plugins.packages import CompilePackages
from whisk_compiler.plugins.rules import CompileRules
from whisk_compiler.plugins.triggers import CompileTriggers

# Registration order is hook dispatch order
COMPILE_PLUGINS = [
    CompilePackages,
    CompileTriggers,
    CompileRules,
]

__all__ = [
    'COMPILE_PLUGINS',
    'CompilePackages',
    'CompileRules',
    'CompileTriggers',
]
