#!/usr/bin/env python3
"""
Tacho, DC and servo motor wrappers.

Every accessor reads the attribute when called with no argument and writes it
when given a value.

    motor = TachoMotor.from_port("outA", "lego-ev3-l-motor")
    motor.speed_sp(500)
    motor.command("run-forever")
"""
import enum
from typing import Any, List, Optional, Tuple

from .device import Device
from .sysfs import (
    COMMAND, COMMANDS, COUNT_PER_M, COUNT_PER_ROT, DC_MOTOR_PATH, DUTY_CYCLE,
    DUTY_CYCLE_SP, FULL_TRAVEL_COUNT, HOLD_PID, MAX_PULSE_SP, MAX_SPEED,
    MID_PULSE_SP, MIN_PULSE_SP, MOTOR_PREFIX, POLARITY, POSITION, POSITION_SP,
    RAMP_DOWN_SP, RAMP_UP_SP, RATE_SP, SERVO_MOTOR_PATH, SPEED, SPEED_PID,
    SPEED_SP, STATE, STOP_ACTION, STOP_ACTIONS, TACHO_MOTOR_PATH, TIME_SP,
)

NORMAL: str = "normal"
INVERSED: str = "inversed"


class MotorState(enum.IntFlag):
    """State flags reported in a motor's ``state`` attribute."""
    RUNNING = 1
    RAMPING = 2
    HOLDING = 4
    OVERLOADED = 8
    STALLED = 16

    @classmethod
    def parse(cls, text: str) -> "MotorState":
        """
        Parse the space separated kernel representation.

        :raises ValueError: On an unknown state name.
        """
        state = cls(0)
        for name in text.split():
            try:
                state |= cls[name.upper()]
            except KeyError:
                raise ValueError(f"unrecognized motor state {name!r}") from None
        return state

    def __str__(self) -> str:
        return "|".join(s.name.lower() for s in MotorState if s in self)


def _check_polarity(polarity: str) -> None:
    if polarity not in (NORMAL, INVERSED):
        raise ValueError(f'polarity must be "{NORMAL}" or "{INVERSED}", not "{polarity}"')


def _check_percent(value: int) -> None:
    if not -100 <= value <= 100:
        raise ValueError(f"duty cycle must be between -100 and 100, not {value}")


def _check_percent_position(value: Any) -> None:
    if not -100 <= value <= 100:
        raise ValueError(f"position must be between -100 and 100, not {value}")


class _Motor(Device):
    """Attributes shared by all motor classes."""
    PREFIX: str = MOTOR_PREFIX
    TYPE: str = "motor"

    def commands(self) -> List[str]:
        """Commands supported by the driver."""
        return self.get_list(COMMANDS)

    def command(self, command: str) -> None:
        """
        Send a command to the motor.

        :param command: One of commands(), e.g. ``run-forever``.
        """
        self.set_attr(COMMAND, command)

    def polarity(self, polarity: Optional[str] = None) -> Optional[str]:
        """
        Get or set polarity.

        :param polarity: ``normal`` or ``inversed``.
        """
        return self._get_or_set(POLARITY, polarity, check=_check_polarity)

    def state(self) -> MotorState:
        """Current state flags."""
        return MotorState.parse(self.get_attr(STATE))


class _Runnable(_Motor):
    """Attributes shared by tacho and DC motors."""

    def duty_cycle(self) -> int:
        """Current duty cycle in percent."""
        return self.get_int(DUTY_CYCLE)

    def duty_cycle_sp(self, duty_cycle: Optional[int] = None) -> Optional[int]:
        """
        Get or set the duty cycle setpoint.

        :param duty_cycle: Percent, -100 to 100.
        """
        return self._get_or_set(DUTY_CYCLE_SP, duty_cycle, int, _check_percent)

    def ramp_up_sp(self, ms: Optional[int] = None) -> Optional[int]:
        """Get or set ramp up time in milliseconds."""
        return self._get_or_set(RAMP_UP_SP, ms, int)

    def ramp_down_sp(self, ms: Optional[int] = None) -> Optional[int]:
        """Get or set ramp down time in milliseconds."""
        return self._get_or_set(RAMP_DOWN_SP, ms, int)

    def stop_action(self, action: Optional[str] = None) -> Optional[str]:
        """Get or set the stop action, one of stop_actions()."""
        return self._get_or_set(STOP_ACTION, action)

    def stop_actions(self) -> List[str]:
        """Stop actions supported by the driver."""
        return self.get_list(STOP_ACTIONS)

    def time_sp(self, ms: Optional[int] = None) -> Optional[int]:
        """Get or set the run-timed duration in milliseconds."""
        return self._get_or_set(TIME_SP, ms, int)

    def is_running(self) -> bool:
        return MotorState.RUNNING in self.state()

    def stop(self, action: Optional[str] = None) -> None:
        """
        Stop the motor.

        :param action: Stop action to apply first, keeps the current one when None.
        """
        if action is not None:
            self.stop_action(action)
        self.command("stop")


class TachoMotor(_Runnable):
    """Motor with a rotation encoder, ``/sys/class/tacho-motor/motorN``."""
    ROOT: str = TACHO_MOTOR_PATH

    def count_per_rot(self) -> int:
        """Encoder counts per rotation of a rotational motor."""
        return self.get_int(COUNT_PER_ROT)

    def count_per_m(self) -> int:
        """Encoder counts per metre of a linear actuator."""
        return self.get_int(COUNT_PER_M)

    def full_travel_count(self) -> int:
        """Encoder counts for the full travel of a linear actuator."""
        return self.get_int(FULL_TRAVEL_COUNT)

    def max_speed(self) -> int:
        """Maximum speed in counts per second."""
        return self.get_int(MAX_SPEED)

    def speed(self) -> int:
        """Current speed in counts per second."""
        return self.get_int(SPEED)

    def speed_sp(self, speed: Optional[int] = None) -> Optional[int]:
        """
        Get or set the speed setpoint.

        :param speed: Counts per second.
        """
        return self._get_or_set(SPEED_SP, speed, int)

    def position(self, position: Optional[int] = None) -> Optional[int]:
        """Get or set the current encoder position."""
        return self._get_or_set(POSITION, position, int)

    def position_sp(self, position: Optional[int] = None) -> Optional[int]:
        """Get or set the target position for run-to-*-pos commands."""
        return self._get_or_set(POSITION_SP, position, int)

    def _pid(self, group: str, kp: Optional[int], ki: Optional[int],
             kd: Optional[int]) -> Optional[Tuple[int, int, int]]:
        if kp is None and ki is None and kd is None:
            return (self.get_int(f"{group}/Kp"),
                    self.get_int(f"{group}/Ki"),
                    self.get_int(f"{group}/Kd"))
        for name, value in (("Kp", kp), ("Ki", ki), ("Kd", kd)):
            if value is not None:
                self.set_attr(f"{group}/{name}", value)
        return None

    def hold_pid(self, kp: Optional[int] = None, ki: Optional[int] = None,
                 kd: Optional[int] = None) -> Optional[Tuple[int, int, int]]:
        """
        Get or set the position hold PID constants.

        :return: (Kp, Ki, Kd) when called without arguments.
        """
        return self._pid(HOLD_PID, kp, ki, kd)

    def speed_pid(self, kp: Optional[int] = None, ki: Optional[int] = None,
                  kd: Optional[int] = None) -> Optional[Tuple[int, int, int]]:
        """
        Get or set the speed regulation PID constants.

        :return: (Kp, Ki, Kd) when called without arguments.
        """
        return self._pid(SPEED_PID, kp, ki, kd)

    def run_forever(self, speed: Optional[int] = None) -> None:
        if speed is not None:
            self.speed_sp(speed)
        self.command("run-forever")

    def run_timed(self, ms: int, speed: Optional[int] = None) -> None:
        self.time_sp(ms)
        if speed is not None:
            self.speed_sp(speed)
        self.command("run-timed")

    def run_to_abs_pos(self, position: int, speed: Optional[int] = None) -> None:
        self.position_sp(position)
        if speed is not None:
            self.speed_sp(speed)
        self.command("run-to-abs-pos")

    def run_to_rel_pos(self, position: int, speed: Optional[int] = None) -> None:
        self.position_sp(position)
        if speed is not None:
            self.speed_sp(speed)
        self.command("run-to-rel-pos")

    def reset(self) -> None:
        """Stop the motor and restore every attribute to its default."""
        self.command("reset")


class DCMotor(_Runnable):
    """Motor without an encoder, ``/sys/class/dc-motor/motorN``."""
    ROOT: str = DC_MOTOR_PATH

    def run_direct(self, duty_cycle: Optional[int] = None) -> None:
        if duty_cycle is not None:
            self.duty_cycle_sp(duty_cycle)
        self.command("run-direct")


class ServoMotor(_Motor):
    """Hobby servo, ``/sys/class/servo-motor/motorN``."""
    ROOT: str = SERVO_MOTOR_PATH

    def max_pulse_sp(self, us: Optional[int] = None) -> Optional[int]:
        """Get or set the pulse width for the +100% position in microseconds."""
        return self._get_or_set(MAX_PULSE_SP, us, int)

    def mid_pulse_sp(self, us: Optional[int] = None) -> Optional[int]:
        """Get or set the pulse width for the 0% position in microseconds."""
        return self._get_or_set(MID_PULSE_SP, us, int)

    def min_pulse_sp(self, us: Optional[int] = None) -> Optional[int]:
        """Get or set the pulse width for the -100% position in microseconds."""
        return self._get_or_set(MIN_PULSE_SP, us, int)

    def position_sp(self, position: Optional[int] = None) -> Optional[int]:
        """
        Get or set the target position.

        :param position: Percent of travel, -100 to 100.
        """
        return self._get_or_set(POSITION_SP, position, int, _check_percent_position)

    def rate_sp(self, ms: Optional[int] = None) -> Optional[int]:
        """Get or set the time to travel from -100% to +100% in milliseconds."""
        return self._get_or_set(RATE_SP, ms, int)

    def run(self) -> None:
        self.command("run")

    def float(self) -> None:
        """Stop driving the servo."""
        self.command("float")