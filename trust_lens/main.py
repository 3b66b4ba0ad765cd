"""Interactive terminal front end for TrustLens."""

import asyncio
import logging
import mimetypes
from pathlib import Path
from typing import List, Optional

from .domain.models.detector import DetectorDefinition, InputKind
from .domain.models.media import RawFile
from .domain.models.verdict import SeverityTier
from .infrastructure.dependencies import ServiceContainer
from .infrastructure.settings import get_settings

SEVERITY_MARKERS = {
    SeverityTier.FAVORABLE: "🟢",
    SeverityTier.CAUTION: "🟡",
    SeverityTier.DANGER: "🔴",
}


def read_media_files(paths: str) -> List[RawFile]:
    """Load comma separated file paths; unreadable paths are reported and skipped."""
    files = []
    for raw_path in paths.split(","):
        raw_path = raw_path.strip()
        if not raw_path:
            continue
        path = Path(raw_path).expanduser()
        try:
            data = path.read_bytes()
        except OSError as e:
            print(f"  Could not read {path}: {e}")
            continue
        content_type, _ = mimetypes.guess_type(path.name)
        files.append(RawFile(name=path.name, content_type=content_type or "", data=data))
    return files


def choose_detector(detectors: List[DetectorDefinition]) -> Optional[DetectorDefinition]:
    print("\nDetectors:")
    for i, detector in enumerate(detectors, 1):
        print(f"{i:2}. {detector.title} - {detector.description}")

    choice = input("\nChoose a detector (or 'quit' to exit): ").strip()
    if choice.lower() in ('quit', 'exit', 'q'):
        return None
    try:
        return detectors[int(choice) - 1]
    except (ValueError, IndexError):
        print("Not a valid choice.")
        return choose_detector(detectors)


async def main():
    """Run the terminal front end."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print("TrustLens - scam, fraud and misinformation detection")
    print("-----------------------------------------------------")

    container = ServiceContainer(settings)
    await container.startup()
    controller = container.get_session_controller()
    detectors = container.get_detector_registry().classifiers()

    try:
        while True:
            detector = choose_detector(detectors)
            if detector is None:
                break

            controller.switch_detector(detector.id)
            controller.reset()
            print(f"\n{detector.title}: {detector.placeholder}")
            controller.set_text(input("Text (blank for none): "))

            if detector.accepts(InputKind.IMAGE) or detector.accepts(InputKind.VIDEO):
                paths = input("Media file paths, comma separated (blank for none): ")
                files = read_media_files(paths)
                if files:
                    controller.attach_files(files)
                    await controller.wait_for_media()
                    for item in controller.state.media_items:
                        if item.error_message:
                            print(f"  Skipped {item.name}: {item.error_message}")

            print("\nAnalyzing...")
            result = await controller.submit()
            state = controller.state

            if result is None:
                print(f"\n{state.error or 'Nothing to analyze.'}")
                continue

            print(f"\n{SEVERITY_MARKERS[result.severity]} {result.label} ({result.confidence:.0f}% confidence)")
            if result.domain:
                print(f"Source: {result.domain}")
            for i, reason in enumerate(result.reason, 1):
                print(f"{i}. {reason}")

    finally:
        # Clean up
        await container.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
