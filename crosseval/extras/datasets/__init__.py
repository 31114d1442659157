from .toy import generate_gaussian_events, toy_classification_loader

__all__ = ["generate_gaussian_events", "toy_classification_loader"]
