"""
This module provides sources backed by hardware interfaces. Currently that
means UART and USB CDC (virtual serial) devices, using PySerial.
"""

# .py files
from .UartSource import *
