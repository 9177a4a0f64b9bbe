from sqldto.utils import logging, serializers, text, type_guards

__all__ = ("logging", "serializers", "text", "type_guards")
