# app/services/__init__.py
"""
Service layer root package.

Each subpackage implements application use-cases on top of:

- SQLAlchemy models (app.models.*)
- Repositories (app.repositories.*)
- Pydantic schemas (app.schemas.*)
- Common service infrastructure (app.services.base.*)

Typical pattern for a service:

    class SomeService(BaseService[Model, ModelRepository]):
        def some_use_case(self, actor, ...) -> ServiceResult[...]:
            try:
                ...
                return ServiceResult.success(data, message="...")
            except Exception as e:
                self._rollback()
                return self._handle_exception(e, "some use case")
"""
