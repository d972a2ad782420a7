from .detection_payloads import detection_result_to_loggable

__all__ = ["detection_result_to_loggable"]
