"""
sfdx-config - resolve sfdx config properties across environment variables,
project settings and global settings, with provenance.
"""

from sfdx_config.config import ConfigAggregator, ConfigInfo, Location

__version__ = "0.1.0"

__all__ = ["ConfigAggregator", "ConfigInfo", "Location", "__version__"]
