"""State layer.

Helpers the :class:`pyshelly.device.Device` entity is built from: the
listener registry for change notifications, the liveness timer and the
pure policy decisions applied to incoming updates.
"""
