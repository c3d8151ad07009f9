from app.application.use_cases.generate_metadata import GenerateMetadataUseCase
from app.infrastructure.adapters.bundles.metadata import get_metadata_adapter_bundle


def get_generate_metadata_use_case() -> GenerateMetadataUseCase:
    """Compose the GenerateMetadataUseCase at Presentation layer using adapter providers."""
    return GenerateMetadataUseCase(get_metadata_adapter_bundle())
