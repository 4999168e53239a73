#!/usr/bin/env python3
""" EV3 Brick Library """

# Device discovery
from .errors import (
    Ev3Error, DeviceNotFound, DriverMismatch, MalformedExport, IOFailure,
    BufferTooSmall,
)
from .sysfs import (
    SysFS, attribute_path, chomp,
    LED_PATH, LEGO_PORT_PATH, SENSOR_PATH, TACHO_MOTOR_PATH,
    SERVO_MOTOR_PATH, DC_MOTOR_PATH,
)
from .resolver import DeviceDescriptor, resolve, descriptors, device_ids
from .device import Device, address_of, driver_for

# Device classes
from .motor import TachoMotor, DCMotor, ServoMotor, MotorState, NORMAL, INVERSED
from .sensor import Sensor
from .port import LegoPort
from .led import LED, GREEN_LEFT, GREEN_RIGHT, RED_LEFT, RED_RIGHT
from .speaker import Speaker
from .i2c import I2CSensor

# Screen
from .surface import RGBASurface, XRGBSurface, new_rgba_with, new_xrgb_with, new_rgba
from .monochrome import (
    Pixel, BLACK, WHITE, Monochrome, to_monochrome, monochrome_model,
    new_monochrome_with, new_monochrome,
)
from .framebuffer import FrameBuffer
from .lcd import LCD_WIDTH, LCD_HEIGHT, LCD_STRIDE, open_lcd

# Configuration and logging
from .config import Config, Settings, load_settings
from .basic import BasicClass, set_debug_level
from .version import __version__
