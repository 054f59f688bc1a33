"""Exception hierarchy for the conversion pipeline."""


class ConversionError(Exception):
    """Base class for errors that abort a conversion run."""


class InputFileError(ConversionError):
    """A required input file is missing or cannot be parsed."""


class XmlAccessError(ConversionError):
    """An element does not have the shape an accessor expects."""


class DataIntegrityError(ConversionError):
    """The parsed corpus is inconsistent (missing ids, dangling refs, collisions)."""
