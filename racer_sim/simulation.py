from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from racer_sim.config import get_config
from racer_sim.engine import Observation, SimulationContext, TelemetryCollector
from racer_sim.engine.track_registry import TrackRegistry
from racer_sim.policy import NetworkPolicy, Policy

Clock = Callable[[], float]


@dataclass
class EpisodeSummary:
    ticks: int = 0
    crashes: int = 0
    stuck_resets: int = 0
    total_reward: float = 0.0
    best_gate_count: int = 0


class StuckWatchdog:
    """Wall-clock timer that expires when no gate has been crossed for ``timeout`` seconds."""

    def __init__(self, timeout: float, clock: Clock = time.monotonic) -> None:
        self.timeout = timeout
        self.clock = clock
        self._deadline = clock() + timeout

    def arm(self) -> None:
        self._deadline = self.clock() + self.timeout

    def feed(self) -> None:
        self.arm()

    def expired(self) -> bool:
        return self.clock() >= self._deadline


class FramePacer:
    """Holds ticks to a target rate; when behind it skips the wait instead of catching up."""

    def __init__(
        self,
        fps: float,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if fps <= 0:
            raise ValueError("fps must be positive")
        self.frame_time = 1.0 / fps
        self.clock = clock
        self.sleep = sleep
        self._next = clock() + self.frame_time
        self.skipped = 0

    def wait(self) -> None:
        now = self.clock()
        if now < self._next:
            self.sleep(self._next - now)
            self._next += self.frame_time
        else:
            self.skipped += 1
            self._next = now + self.frame_time


class EpisodeRunner:
    """Drives a SimulationContext with a policy, resetting on crashes and stalls."""

    def __init__(
        self,
        context: SimulationContext,
        policy: Optional[Policy] = None,
        verbose: bool = True,
        clock: Clock = time.monotonic,
        stuck_timeout: Optional[float] = None,
        crash_penalty: Optional[float] = None,
        stuck_penalty: Optional[float] = None,
    ) -> None:
        self.context = context
        self.policy = policy or NetworkPolicy()
        self.verbose = verbose
        self.clock = clock
        self.crash_penalty = float(
            crash_penalty if crash_penalty is not None else get_config("driver.crash_penalty", -99.0)
        )
        self.stuck_penalty = float(
            stuck_penalty if stuck_penalty is not None else get_config("driver.stuck_penalty", -1.0)
        )
        timeout = stuck_timeout if stuck_timeout is not None else get_config("driver.stuck_timeout_seconds", 30.0)
        self.watchdog = StuckWatchdog(float(timeout), clock)
        self.summary = EpisodeSummary()
        self.observation: Observation = context.observe()

    @classmethod
    def for_track(
        cls,
        track_id: str,
        registry: Optional[TrackRegistry] = None,
        telemetry: Optional[TelemetryCollector] = None,
        **kwargs,
    ) -> "EpisodeRunner":
        layout = (registry or TrackRegistry()).load(track_id)
        return cls(SimulationContext(layout, telemetry=telemetry), **kwargs)

    def tick(self) -> float:
        """Runs one frame and returns the reward handed to the policy."""
        context = self.context
        control = self.policy.decide(self.observation)
        observation = context.step(control)
        reward = observation.reward

        self.summary.best_gate_count = max(self.summary.best_gate_count, context.gates.crossed_count)

        was_reset = False
        if observation.crashed:
            reward = self.crash_penalty
            self.summary.crashes += 1
            self._reset("crash_reset")
            was_reset = True
            if self.verbose:
                print(f"Tick {context.tick_index}: crashed, resetting (crash #{self.summary.crashes})")
        elif observation.reward > 0:
            self.watchdog.feed()
            if self.verbose:
                print(f"Tick {context.tick_index}: gate {context.gates.crossed_count} crossed, reward {reward:.1f}")
        elif self.watchdog.expired():
            reward = self.stuck_penalty
            self.summary.stuck_resets += 1
            self._reset("stuck_reset")
            was_reset = True
            if self.verbose:
                print(f"Tick {context.tick_index}: no progress for {self.watchdog.timeout:.0f}s, resetting")

        self.policy.reinforce(reward, observation)
        # After a reset the policy decides from the restored pose.
        self.observation = context.observe(reward) if was_reset else observation
        self.summary.ticks += 1
        self.summary.total_reward += reward
        return reward

    def run(self, ticks: int, realtime: bool = False, fps: Optional[float] = None) -> EpisodeSummary:
        pacer = None
        if realtime:
            pacer = FramePacer(float(fps or get_config("driver.fps", 60)), clock=self.clock)

        if self.verbose:
            print(f"\n--- Running {ticks} ticks on {self.context.layout.name} ---")
        for _ in range(ticks):
            self.tick()
            if pacer is not None:
                pacer.wait()

        if self.verbose:
            s = self.summary
            print(
                f"Finished: {s.ticks} ticks, {s.crashes} crashes, {s.stuck_resets} stuck resets, "
                f"best gates {s.best_gate_count}, total reward {s.total_reward:.1f}"
            )
        return self.summary

    def _reset(self, event: str) -> None:
        telemetry = self.context.telemetry
        if telemetry is not None and telemetry.frames:
            telemetry.frames[-1].events.append(event)
        self.context.reset()
        self.watchdog.arm()
