"""movemoro: work/break intervals with exercise snacks."""

__version__ = "0.1.0"
