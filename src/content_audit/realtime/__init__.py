"""Real-time re-audit trigger."""

from .trigger import PipelineRunner, RealTimeTrigger, Renderer, TriggerState

__all__ = ["PipelineRunner", "RealTimeTrigger", "Renderer", "TriggerState"]
