"""Feature modules of the RiftRadar gateway."""
