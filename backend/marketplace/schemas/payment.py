from marketplace.schemas.common import CamelModel, RequiredStr


class PaymentProof(CamelModel):
    reference_code: str | None = None
    screenshot_url: str | None = None


class PaymentVerify(CamelModel):
    status: RequiredStr


class PaymentResponse(CamelModel):
    id: str
    user_id: str
    payment_type: str
    amount: int
    reference_code: str | None
    screenshot_url: str | None
    status: str
    verified_by_id: str | None
    verified_at: str | None
    event_registration_id: str | None
    event_id: str | None
    business_id: str | None
    job_post_id: str | None
    created_at: str
    updated_at: str
