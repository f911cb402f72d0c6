"""
Behaviour mixins composed into the concrete `Tensor`.

Each subpackage exposes one abstract mixin. Subpackages that register
layout-specific control paths import their implementation modules on import,
so importing the mixin is enough to make its dispatchers complete.
"""
