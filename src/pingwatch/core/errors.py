"""Errors that abort a probe run."""


class PingwatchError(Exception):
    """Base class for fatal pingwatch errors"""


class StateStoreError(PingwatchError):
    """State file could not be written"""


class ReportWriteError(PingwatchError):
    """Status report could not be written"""
