"""CPU scheduling policy simulator: Round-Robin, preemptive SJF, aging Priority and AG."""

from .task import Task, TaskSpec
from .clock import SimulationClock
from .context_switch import ContextSwitchManager
from .execution_log import ExecutionLog, ExecutionRecord
from .ready_queue import ReadyQueue
from .scheduler import Scheduler
from .schedulers import AgingPriorityScheduler, RoundRobinScheduler, ShortestRemainingTimeScheduler
from .ag_scheduler import AGScheduler
from .simulator import SimulationConfig, SimulationEngine, SimulationResult, simulate
from . import workload
from . import metrics
from . import evaluation

__all__ = [
	"Task",
	"TaskSpec",
	"SimulationClock",
	"ContextSwitchManager",
	"ExecutionLog",
	"ExecutionRecord",
	"ReadyQueue",
	"Scheduler",
	"RoundRobinScheduler",
	"ShortestRemainingTimeScheduler",
	"AgingPriorityScheduler",
	"AGScheduler",
	"SimulationConfig",
	"SimulationEngine",
	"SimulationResult",
	"simulate",
	"workload",
	"metrics",
	"evaluation",
]
