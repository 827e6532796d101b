"""
RiftRadar backend package.

Gateway between the RiftRadar front end and the Riot Games API: outbound
rate gating, platform/region routing, typed upstream operations and the
static reference data bundle.
"""

__version__ = "0.1.0"
