"""Calibrated pixel buffers, image metadata and derived geometry."""
