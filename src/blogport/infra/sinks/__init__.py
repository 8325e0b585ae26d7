"""Output sinks for converted posts."""

from blogport.infra.sinks.hugo import DryRunSink, HugoOutputSink

__all__ = ["DryRunSink", "HugoOutputSink"]
