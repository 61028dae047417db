"""Endpoint for classifying mod filenames."""

from dataclasses import replace

from fastapi import APIRouter, Depends

from modpack_manager.config import Settings
from modpack_manager.matching.classifier import FilenameClassifier
from modpack_manager.routers.deps import get_settings
from modpack_manager.schemas.classify import ClassifiedFile, ClassifyRequest
from modpack_manager.schemas.snapshot import ModRecord
from modpack_manager.services.snapshot_service import classifier_context
from modpack_manager.snapshots.keys import key_of

router = APIRouter(prefix="/classify", tags=["classify"])


@router.post("/", response_model=list[ClassifiedFile])
async def classify_files(
    data: ClassifyRequest,
    settings: Settings = Depends(get_settings),
) -> list[ClassifiedFile]:
    """Classify filenames, using request overrides on top of the configured defaults."""
    context = classifier_context(settings)
    overrides = data.model_dump(
        include={"platform_version", "loader", "known_platform_versions"},
        exclude_none=True,
    )
    if "known_platform_versions" in overrides:
        overrides["known_platform_versions"] = frozenset(overrides["known_platform_versions"])
    if overrides:
        context = replace(context, **overrides)

    classifier = FilenameClassifier(context)
    results: list[ClassifiedFile] = []
    for file_name in data.file_names:
        identity, rule = classifier.classify_with_rule(file_name)
        results.append(
            ClassifiedFile(
                file_name=file_name,
                key=key_of(ModRecord(file_name=file_name, identity=identity)),
                rule=rule,
                identity=identity,
            )
        )
    return results
