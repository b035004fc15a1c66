"""Implementation parts for :mod:`school_console.base.cancellation`."""
