class DomainException(Exception):
    pass


class ValidationError(DomainException):
    """Некорректные входные данные — собирает все нарушения, а не только первое"""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Ошибка валидации: {'; '.join(self.errors)}")


class DuplicateProductError(ValidationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__([f"Товар с названием '{name}' уже существует"])


class NotFoundError(DomainException):
    pass


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Товар {product_id} не найден")


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Заказ {order_id} не найден")


class InsufficientStockError(DomainException):
    def __init__(self, product_name: str, available: int, required: int):
        self.product_name = product_name
        self.available = available
        self.required = required
        super().__init__(
            f"Недостаточно товара {product_name}. Доступно: {available}, требуется: {required}"
        )


class InvalidStateError(DomainException):
    pass


class InvalidArgumentError(DomainException):
    pass
