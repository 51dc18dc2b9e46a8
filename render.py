from __future__ import annotations
import base64
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from config import Settings
from generate import InitPolicy, PatternOrRandom, initial_row
from image import Encoder, PngEncoder
from params import RequestParams
from rules import ElementaryRule, InvalidArgument
from simulate import Grid, evolve


@dataclass(frozen=True)
class RenderedImage:
    data: bytes
    content_type: str
    filename: str
    grid: Grid


def suggested_filename(rule: int | ElementaryRule, extension: str = "png") -> str:
    return f"rule{int(rule)}.{extension}"


@dataclass
class AutomatonRenderer:
    """
    Drives an elementary CA from its first generation and hands the
    finished grid to an encoder.

    The initial row is always row 0, so a run of `steps` steps yields
    steps + 1 rows.
    """
    encoder: Encoder = field(default_factory=PngEncoder)

    def render(
        self,
        rule: int | ElementaryRule,
        cells: int,
        steps: int,
        policy: Optional[InitPolicy] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> Grid:
        if cells < 1:
            raise InvalidArgument(f"cells must be at least 1, got {cells}")
        if steps < 1:
            raise InvalidArgument(f"steps must be at least 1, got {steps}")
        rule = ElementaryRule.coerce(rule)
        if policy is None:
            policy = PatternOrRandom()
        first = initial_row(policy, cells, rng=rng)
        return evolve(rule, first, steps)

    def render_image(
        self,
        rule: int | ElementaryRule,
        cells: int,
        steps: int,
        policy: Optional[InitPolicy] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> RenderedImage:
        grid = self.render(rule, cells, steps, policy, rng=rng)
        return RenderedImage(
            data=self.encoder.encode(grid),
            content_type=self.encoder.content_type,
            filename=suggested_filename(rule, self.encoder.extension),
            grid=grid,
        )


def make_renderer(settings: Settings) -> AutomatonRenderer:
    return AutomatonRenderer(PngEncoder(foreground=settings.foreground, background=settings.background))


def render_for_params(renderer: AutomatonRenderer, params: RequestParams) -> RenderedImage:
    return renderer.render_image(params.rule, params.cells, params.steps, params.policy())


def log_entry(params: RequestParams, image: RenderedImage, source: str) -> dict:
    return {
        "rule": params.rule,
        "cells": params.cells,
        "steps": params.steps,
        "start_type": params.start_type.value,
        "seed": params.seed,
        "rows": image.grid.height,
        "bytes": len(image.data),
        "source": source,
    }


def data_uri(image: RenderedImage) -> str:
    """Inline form of an image, for pages that must stand alone."""
    encoded = base64.b64encode(image.data).decode("ascii")
    return f"data:{image.content_type};base64,{encoded}"
