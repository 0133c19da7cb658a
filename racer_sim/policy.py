from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np
import torch
import torch.nn as nn
import torch.optim as optim

from racer_sim.config import BALANCE_CONFIG
from racer_sim.engine.data_models import SENSOR_COUNT, ControlInput, Observation

INTERSECTION_FEATURES = SENSOR_COUNT * 2
HIDDEN_UNITS = 4


def _policy_config() -> dict:
    if not isinstance(BALANCE_CONFIG, dict):
        return {}
    config = BALANCE_CONFIG.get("policy")
    if not isinstance(config, dict):
        return {}
    return config


class Policy(ABC):
    """Turns observations into control input and learns from per-tick reward."""

    @abstractmethod
    def decide(self, observation: Observation) -> ControlInput:
        raise NotImplementedError

    @abstractmethod
    def reinforce(self, reward: float, observation: Optional[Observation] = None) -> None:
        raise NotImplementedError


class RandomPolicy(Policy):
    """Uniform random explorer; by default each axis is drawn from {-1, 0}."""

    def __init__(self, seed: Optional[int] = None, choices: Sequence[float] = (-1.0, 0.0)) -> None:
        if not choices:
            raise ValueError("RandomPolicy needs at least one choice")
        self.rng = random.Random(seed)
        self.choices = tuple(float(choice) for choice in choices)

    def decide(self, observation: Observation) -> ControlInput:
        return ControlInput(turn=self.rng.choice(self.choices), throttle=self.rng.choice(self.choices))

    def reinforce(self, reward: float, observation: Optional[Observation] = None) -> None:
        return None


class NetworkPolicy(Policy):
    """
    Epsilon-greedy dense network over the eight normalized sensor hits.

    The network is 16 -> 4 -> 2 with a ReLU on the outputs, trained with Adam
    on mean squared error. Learning nudges the current belief by the reward
    (turn up, throttle down) and takes one optimizer step toward the nudged
    target, clipped to [-1, 1].
    """

    def __init__(
        self,
        epsilon: Optional[float] = None,
        learning_rate: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> None:
        config = _policy_config()
        self.epsilon = float(config.get("epsilon", 0.5) if epsilon is None else epsilon)
        self.learning_rate = float(config.get("learning_rate", 0.01) if learning_rate is None else learning_rate)
        seed = config.get("seed") if seed is None else seed
        if seed is not None:
            torch.manual_seed(seed)

        self.rng = random.Random(seed)
        self.explorer = RandomPolicy(seed=seed)
        self.model = nn.Sequential(
            nn.Linear(INTERSECTION_FEATURES, HIDDEN_UNITS),
            nn.Linear(HIDDEN_UNITS, 2),
            nn.ReLU(),
        )
        self.optimizer = optim.Adam(self.model.parameters(), lr=self.learning_rate)
        self.last_loss: Optional[float] = None
        self._last_inputs: Optional[np.ndarray] = None

    @staticmethod
    def inputs(observation: Observation) -> np.ndarray:
        return observation.features()[:INTERSECTION_FEATURES]

    def _tensor(self, inputs: np.ndarray) -> torch.Tensor:
        return torch.from_numpy(np.asarray(inputs)).float().unsqueeze(0)

    def predict(self, inputs: np.ndarray) -> np.ndarray:
        with torch.no_grad():
            return self.model(self._tensor(inputs)).squeeze(0).numpy()

    def decide(self, observation: Observation) -> ControlInput:
        inputs = self.inputs(observation)
        self._last_inputs = inputs
        if self.rng.random() < self.epsilon:
            return self.explorer.decide(observation)
        turn, throttle = self.predict(inputs)
        return ControlInput.clamped(turn, throttle)

    def reinforce(self, reward: float, observation: Optional[Observation] = None) -> None:
        inputs = self.inputs(observation) if observation is not None else self._last_inputs
        if inputs is None:
            return

        belief = self.model(self._tensor(inputs))
        with torch.no_grad():
            nudge = torch.tensor([[reward, -reward]], dtype=belief.dtype)
            target = torch.clamp(belief + nudge, -1.0, 1.0)

        loss = nn.functional.mse_loss(belief, target)
        self.optimizer.zero_grad()
        loss.backward()
        self.optimizer.step()
        self.last_loss = loss.item()
