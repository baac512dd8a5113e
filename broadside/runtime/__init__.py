"""Runtime primitives: deferred scheduling, flow tables, logging."""

from broadside.runtime.clock import RealTimeDriver
from broadside.runtime.flow import FlowProgram, FlowTransition
from broadside.runtime.scheduler import Scheduler

__all__ = ["FlowProgram", "FlowTransition", "RealTimeDriver", "Scheduler"]
