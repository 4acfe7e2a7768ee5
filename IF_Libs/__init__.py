"""
IF_Libs - InstaFilter Library Modules

This package contains core functionality for the InstaFilter project,
organized into specialized sub-packages:

- FilterLib: Filter kinds, parameter tables and image operations
- PipelineLib: The filter pipeline and its usage counter
- ImageIOLib: Decoding picked photos and encoding results for sharing
- PrefStoreLib: Preference persistence
"""

__version__ = "0.1.0"
