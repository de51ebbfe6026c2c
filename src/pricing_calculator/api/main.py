from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel

from pricing_calculator.engine import Calculator, EntityNotFoundError, PricingError, PricingModifier
from pricing_calculator.api.state import repository

app = FastAPI(
    title="Pricing Calculator API",
    description="Best price lookup for product, venue and member combinations",
    version="1.0.0"
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CalcRequest(BaseModel):
    product_id: int
    venue_id: int
    member_id: int
    at: Optional[datetime] = None  # evaluation instant, defaults to now


class ModifierResponse(BaseModel):
    id: int
    name: str
    conditions: dict
    adjustment_type: str
    adjustment_value: Decimal


class ValidModifierResponse(ModifierResponse):
    price: Decimal


class CalcResponse(BaseModel):
    product_id: int
    venue_id: int
    member_id: int
    base_price: Decimal
    best_price: Decimal
    valid_modifiers: List[ValidModifierResponse]


def _modifier_fields(modifier: PricingModifier) -> dict:
    return {
        "id": modifier.id,
        "name": modifier.name,
        "conditions": modifier.conditions_payload(),
        "adjustment_type": modifier.adjustment_type.value,
        "adjustment_value": modifier.adjustment_value,
    }


@app.get("/")
async def root():
    return {"status": "online", "message": "Pricing Calculator API Active"}


@app.post("/calculate", response_model=CalcResponse)
async def calculate_price(req: CalcRequest):
    now = req.at or datetime.now()
    try:
        product = repository.get_product(req.product_id, now)
        venue = repository.get_venue(req.venue_id)
        member = repository.get_member(req.member_id)
        quote = Calculator(clock=lambda: now).calculate(product, venue, member)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PricingError as e:
        logger.error(f"Stored pricing data is invalid: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return CalcResponse(
        product_id=product.id,
        venue_id=venue.id,
        member_id=member.id,
        base_price=quote.base_price,
        best_price=quote.best_price,
        valid_modifiers=[
            ValidModifierResponse(**_modifier_fields(vm.modifier), price=vm.price)
            for vm in quote.valid_modifiers
        ],
    )


@app.get("/products/{product_id}/modifiers", response_model=List[ModifierResponse])
async def get_current_modifiers(product_id: int, at: Optional[datetime] = None):
    try:
        product = repository.get_product(product_id, at or datetime.now())
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PricingError as e:
        logger.error(f"Stored pricing data is invalid: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return [ModifierResponse(**_modifier_fields(m)) for m in product.pricing_option.current_modifiers]
