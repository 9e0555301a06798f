from pydantic import BaseModel


class InactiveCustomerRemindersResponseDTO(BaseModel):
    reminded_customer_ids: list[int]
    total: int
