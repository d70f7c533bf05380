"""Export of composed documents to WordprocessingML."""

from .xml_exporter import XMLExporter

__all__ = ['XMLExporter']
