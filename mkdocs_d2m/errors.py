"""Exceptions raised while ingesting Doxygen XML."""


class DoxygenError(RuntimeError):
    pass


class SchemaError(DoxygenError):
    """The input does not follow the Doxygen XML layout we rely on."""


class UnknownIdentifierError(DoxygenError):
    """A definition document refers to an id the index never declared."""

    def __init__(self, category, refid):
        super().__init__(f"unknown {category} id: {refid}")
        self.category = category
        self.refid = refid


class DuplicateIdentifierError(DoxygenError):
    def __init__(self, category, refid):
        super().__init__(f"{category} id declared twice: {refid}")
        self.category = category
        self.refid = refid
