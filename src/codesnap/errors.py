# src/codesnap/errors.py


class CodesnapError(Exception): ...
class InvalidRootError(CodesnapError): ...
class IgnoreFileError(CodesnapError): ...
class FileReadError(CodesnapError): ...
class TreeCommandError(CodesnapError): ...
class DeliveryError(CodesnapError): ...
