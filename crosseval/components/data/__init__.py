from .loader import BACKGROUND, SIGNAL, EventDataLoader, LabeledEvents, normalize_weights

__all__ = ["SIGNAL", "BACKGROUND", "EventDataLoader", "LabeledEvents", "normalize_weights"]
