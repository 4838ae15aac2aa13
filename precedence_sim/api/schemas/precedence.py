from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class SimulateRequest(BaseModel):
    rule: Optional[str] = Field(default=None, description="Precedence rule. Defaults to PRECEDENCE_DEFAULT_RULE.")
    advices: List[str] = Field(default_factory=list, description="Advice types in declaration order.")


class ExportRequest(SimulateRequest):
    delimiter: str = Field(default=",", min_length=1, max_length=1)


class ReduceRequest(BaseModel):
    vertices: List[str] = Field(default_factory=list, description="Advice labels, e.g. 'before-1'.")
    edges: List[List[str]] = Field(default_factory=list, description="[source, target] label pairs.")


class CycleReportModel(BaseModel):
    has_cycles: bool
    cyclic_vertices: List[str] = Field(default_factory=list)
    simple_cycles: List[List[str]] = Field(default_factory=list)
    truncated: bool = False


class TraceEntryModel(BaseModel):
    depth: int
    advice: Optional[str] = None
    pre_message: Optional[str] = None
    post_message: Optional[str] = None


class SimulationResponse(BaseModel):
    rule: str
    outcome: str
    advices: List[str]
    original_edges: List[List[str]]
    reduced_edges: List[List[str]]
    cycles: CycleReportModel
    trace: Optional[List[TraceEntryModel]] = None
    lines: List[str] = Field(default_factory=list)


class DemoSimulationResponse(SimulationResponse):
    aspect: str


class DemoResponse(BaseModel):
    results: List[DemoSimulationResponse]


class ReduceResponse(BaseModel):
    vertices: List[str]
    edges: List[List[str]]
    removed_edges: int
    cycles: CycleReportModel


class RulesResponse(BaseModel):
    rules: List[str]
    default_rule: str
