"""TaskMaster API package.

Task and comment workflows plus the real-time notification pipeline that turns
their domain events into persisted records and websocket pushes.
"""
