"""
Exceptions raised by the pricing engine and its data layer.
"""


class PricingError(Exception):
    """Base exception for all pricing errors"""
    pass


class UnrecognizedConditionKind(PricingError):
    """Raised when a modifier carries a condition the checker does not know"""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unrecognised pricing modifier condition: {kind}")


class UnrecognizedAdjustmentType(PricingError):
    """Raised when a modifier carries an adjustment type the calculator does not know"""

    def __init__(self, adjustment_type):
        self.adjustment_type = adjustment_type
        super().__init__(f"Unrecognised pricing modifier adjustment type: {adjustment_type}")


class EntityNotFoundError(PricingError):
    """Raised when a product, venue or member lookup finds nothing"""

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            super().__init__(f"No {entity} records available")
        else:
            super().__init__(f"No {entity} found with ID {entity_id}")


class InvalidModifierData(PricingError):
    """Raised when a stored modifier's conditions cannot be decoded into a known shape"""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid pricing modifier data: {detail}")
