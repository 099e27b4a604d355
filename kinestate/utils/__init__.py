"""Quaternion, SE(3) and error helpers shared by the state classes."""
