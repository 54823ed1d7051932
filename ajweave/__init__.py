"""
ajweave - AspectJ weaving shim for build pipelines

Runs the external AspectJ compiler (ajc) over compiled classes, stages its
output, publishes the woven classes into the build tree and reports the
compiler's diagnostics.

Architecture:
- Weaving Context: argument assembly, compiler invocation, output staging
  and diagnostic reporting
"""

__version__ = "0.1.0"
