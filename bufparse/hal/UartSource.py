import serial

from ..Source import *

class UartSource(Source):
    """Serial source reading from a UART or USB CDC device.

    This class reads from a serial port using PySerial as the low-level driver.
    The port is expected to be open already; a port that has been closed is
    treated as the end of the stream. `SerialException` is an `IOError`, so
    failures raised by PySerial surface from the parser session as source
    failures."""

    def __init__(self, port):
        """Creates a new serial source.

        :param port: Open PySerial port object, such as one returned by
            `serial.Serial()` or `serial.serial_for_url()`
        :type port: serial.Serial

        The port's own `timeout` setting decides how long a single read may
        wait. With no timeout (the PySerial default), a read blocks until at
        least one byte arrives."""

        self.port = port

    def __str__(self):
        """Generates the string representation of the serial source.

        :returns: String representation of the source
        :rtype: str
        """

        return self.port.port if self.port.port is not None else "unidentified serial port"

    def fill_more(self, buffer) -> int:
        """Reads waiting serial data into the free space of a buffer.

        :param buffer: Buffer to read into, already prepared by `make_room()`
        :type buffer: GrowableBuffer

        :returns: Number of bytes written, or 0 if the port is closed
        :rtype: int

        Everything already waiting in the driver is read at once (up to the
        free space available), or a single byte if nothing is waiting yet. A
        read that comes back empty means the port timeout expired, which is
        reported as a TimeoutError rather than end of input."""

        if not self.port.is_open:
            # a closed port cannot deliver any more data
            return 0

        with buffer.writable() as view:
            size = min(len(view), max(1, self.port.in_waiting))
            data = self.port.read(size)
            view[:len(data)] = data

        if len(data) == 0:
            raise TimeoutError("No data from %s within %s second(s)" % (self, self.port.timeout))

        return len(data)
