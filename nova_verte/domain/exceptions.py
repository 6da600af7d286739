"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Simulator input rejected; the message is shown to the user as-is"""

    message = "Dados inválidos."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class EmptyTitleListError(ValidationError):
    """No titles to calculate"""

    message = "Adicione pelo menos uma duplicata para calcular."


class IncompleteTitleError(ValidationError):
    """Title has an empty/zero face value or a missing due date"""

    message = "Por favor, preencha todos os campos (Valor e Data) corretamente."


class PastDueDateError(ValidationError):
    """Due date is before today"""

    message = "A data de vencimento não pode ser no passado."


class TitleNotFoundError(DomainException):
    """No title with the requested id in the session"""

    pass


class NoResultError(DomainException):
    """Export requested before any calculation"""

    message = "Nenhum resultado para gerar PDF."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class ExportError(DomainException):
    """Document rendering failed"""

    message = "Erro ao gerar PDF. Tente novamente."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
