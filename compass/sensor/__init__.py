"""Serial byte source for an NMEA heading sensor."""

from compass.sensor.reader import HeadingSensorReader

__all__ = ["HeadingSensorReader"]
