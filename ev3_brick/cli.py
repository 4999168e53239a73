# ev3_brick/cli.py
"""
Console script entry point: inspect devices, drive LEDs and the LCD.
"""
import argparse
import sys
from typing import Dict, List, Optional, Type

from .basic import set_debug_level
from .config import load_settings
from .device import Device
from .errors import DeviceNotFound, DriverMismatch, Ev3Error
from .lcd import open_lcd
from .led import LED
from .motor import DCMotor, ServoMotor, TachoMotor
from .port import LegoPort
from .sensor import Sensor
from .utils import error, info, warn
from .version import __version__

DEVICE_CLASSES: Dict[str, Type[Device]] = {
    "lego-port": LegoPort,
    "lego-sensor": Sensor,
    "tacho-motor": TachoMotor,
    "dc-motor": DCMotor,
    "servo-motor": ServoMotor,
}


def list_devices(names: List[str], sysfs_root: str) -> None:
    """Print id, address and driver of every device in the given classes."""
    for name in names:
        cls = DEVICE_CLASSES[name]
        try:
            found = cls.list(sysfs_root)
        except Ev3Error as e:
            warn(f"{name}: {e}")
            continue
        info(f"{name}:")
        if not found:
            print("  (none)")
        for desc in found:
            print(f"  {cls.PREFIX}{desc.id}\t{desc.address}\t{desc.driver_name}")


def find_device(name: str, driver: str, port: str, sysfs_root: str) -> int:
    cls = DEVICE_CLASSES[name]
    try:
        device = cls.from_port(port, driver, sysfs_root=sysfs_root)
    except DriverMismatch as e:
        print(e.id)
        warn(str(e), file=sys.stderr)
        return 0
    except DeviceNotFound as e:
        error(str(e), file=sys.stderr)
        return 1
    print(device.id)
    return 0


def led_command(name: str, brightness: Optional[int], sysfs_root: str) -> None:
    led = LED(name, sysfs_root=sysfs_root)
    if brightness is None:
        print(led.brightness())
    else:
        led.brightness(brightness)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ev3-brick",
        description="Inspect and drive LEGO EV3 devices exported by ev3dev"
    )
    parser.add_argument('--version', action='store_true', help='Show ev3_brick version')
    parser.add_argument('--config', help='Configuration file to read')
    parser.add_argument('--sysfs-root', help='Read devices under this directory instead of /sys')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log attribute access')
    sub = parser.add_subparsers(dest='command')

    p_list = sub.add_parser('list', help='List devices')
    p_list.add_argument('device_class', nargs='?', choices=sorted(DEVICE_CLASSES))

    p_find = sub.add_parser('find', help='Print the id of the device running a driver')
    p_find.add_argument('device_class', choices=sorted(DEVICE_CLASSES))
    p_find.add_argument('driver')
    p_find.add_argument('--port', default='', help='Port address, e.g. outA or in1')

    p_led = sub.add_parser('led', help='Read or set LED brightness')
    p_led.add_argument('name', help='LED name, e.g. led0:green:brick-status')
    p_led.add_argument('brightness', nargs='?', type=int)

    p_lcd = sub.add_parser('lcd', help='LCD operations')
    p_lcd.add_argument('action', choices=['clear'])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    settings = load_settings(args.config)
    if args.sysfs_root is not None:
        settings.sysfs_root = args.sysfs_root
    if args.verbose:
        settings.debug_level = 'debug'
    set_debug_level(settings.debug_level)

    try:
        if args.command == 'list':
            names = [args.device_class] if args.device_class else sorted(DEVICE_CLASSES)
            list_devices(names, settings.sysfs_root)
        elif args.command == 'find':
            return find_device(args.device_class, args.driver, args.port, settings.sysfs_root)
        elif args.command == 'led':
            led_command(args.name, args.brightness, settings.sysfs_root)
        elif args.command == 'lcd':
            with open_lcd(settings) as lcd:
                lcd.clear()
        else:
            parser.print_help()
    except Ev3Error as e:
        error(str(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
