"""
Wallet - account key handling for monadex.

Keys live only for the duration of one command invocation.
"""
