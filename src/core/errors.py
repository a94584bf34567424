"""Excepciones del dominio para la canalización de pose en vivo.

Ninguna de ellas es fatal: cada componente las recupera localmente y el bucle de
renderizado continúa con el siguiente tick."""


class PipelineError(Exception):
    """Excepción base para los fallos recuperables de la canalización."""


class InvalidSource(PipelineError):
    """Se lanza cuando el fotograma de origen todavía no tiene dimensiones válidas."""


class EstimationFailure(PipelineError):
    """La llamada de inferencia de pose fue rechazada por el estimador."""


class ConstructionFailure(PipelineError):
    """No fue posible construir un nuevo estimador para el modo solicitado."""


class StaleResult(PipelineError):
    """El resultado pertenece a una generación de estimador ya sustituida."""
