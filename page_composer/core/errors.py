"""Exceptions du moteur de composition."""


class ComposerError(Exception):
    """Base de toutes les erreurs page_composer."""


class AttachmentValidationError(ComposerError):
    """Fichier refusé avant tout I/O (jamais réessayé automatiquement)."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"{filename}: {reason}")


class FileTooLarge(AttachmentValidationError):
    def __init__(self, filename: str, size_bytes: int, limit: int):
        self.size_bytes = size_bytes
        self.limit = limit
        super().__init__(filename, f"fichier trop volumineux ({size_bytes} > {limit} octets)")


class UnsupportedFileType(AttachmentValidationError):
    def __init__(self, filename: str, mime_type: str):
        self.mime_type = mime_type
        super().__init__(filename, f"type de fichier non supporté ({mime_type})")


class PersistenceError(ComposerError):
    """Échec d'un collaborateur de stockage (save/load/delete/upload)."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class PageNotFound(ComposerError):
    """Page introuvable par path puis par id — état terminal."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Page {identifier!r} introuvable")
