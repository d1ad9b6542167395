"""Errors."""
class LogicGraphError(Exception): pass
class LookupFailure(LogicGraphError): pass
class PortNotFoundError(LookupFailure): pass
class NodeNotFoundError(LookupFailure): pass
class IncompatiblePortsError(LogicGraphError): pass
class DuplicateIdError(LogicGraphError): pass
class IndexBoundsError(LogicGraphError): pass
class DocumentError(LogicGraphError): pass
