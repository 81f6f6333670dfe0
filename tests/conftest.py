from __future__ import annotations

import math

import pytest

from jewelfit.anatomy.landmarks import LandmarkSet, LandmarkSetKind
from jewelfit.config import EngineConfig, build_config

NAN = (math.nan, math.nan)

# Normalized hand skeleton, palm facing the camera, fingers pointing up.
HAND_POINTS = {
    0: (0.50, 0.90),   # wrist
    1: (0.40, 0.85),
    2: (0.34, 0.78),
    3: (0.30, 0.72),
    4: (0.27, 0.66),
    5: (0.42, 0.60),   # index MCP
    6: (0.40, 0.50),   # index PIP
    7: (0.39, 0.44),
    8: (0.38, 0.39),
    9: (0.48, 0.58),   # middle MCP
    10: (0.47, 0.46),  # middle PIP
    11: (0.47, 0.39),
    12: (0.47, 0.33),
    13: (0.54, 0.60),  # ring MCP
    14: (0.56, 0.49),  # ring PIP
    15: (0.57, 0.43),
    16: (0.58, 0.38),
    17: (0.60, 0.64),  # pinky MCP
    18: (0.62, 0.56),
    19: (0.63, 0.51),
    20: (0.64, 0.47),
}

# Face mesh points used by the earring and necklace references.
FACE_POINTS = {
    132: (0.15, 0.20),  # earlobe
    135: (0.17, 0.24),
    150: (0.19, 0.25),
    165: (0.20, 0.21),
    152: (0.50, 0.60),  # chin
    205: (0.40, 0.50),  # left jaw
    425: (0.60, 0.50),  # right jaw
}


def make_face(points=None, width: int = 1000, height: int = 1000) -> LandmarkSet:
    dense = [None] * 468
    for index, point in (points if points is not None else FACE_POINTS).items():
        dense[index] = point
    return LandmarkSet.from_points(LandmarkSetKind.FACE, dense, width, height)


def make_hand(points=None, width: int = 1000, height: int = 1000) -> LandmarkSet:
    dense = [NAN] * 21
    for index, point in (points if points is not None else HAND_POINTS).items():
        dense[index] = point
    return LandmarkSet.from_points(LandmarkSetKind.HAND, dense, width, height)


@pytest.fixture(scope="session")
def config() -> EngineConfig:
    return build_config()


@pytest.fixture
def face_landmarks() -> LandmarkSet:
    return make_face()


@pytest.fixture
def hand_landmarks() -> LandmarkSet:
    return make_hand()
