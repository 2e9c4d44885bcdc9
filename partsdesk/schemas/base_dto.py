from pydantic import BaseModel, ConfigDict


class BaseDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    @classmethod  # every DTO spells out its own mapping
    def from_domain_model(cls, orm_obj):
        """
        Subclasses must override.
        """
        raise NotImplementedError(
            f"{cls.__name__}.from_domain_model() must be implemented"
        )
