"""
ModulePush Collector Package.

Builds the module set from the watched directory.
Requires Python 3.11+.
"""

from collector.module_collector import ModuleCollector, module_name_for

__all__ = ["ModuleCollector", "module_name_for"]
