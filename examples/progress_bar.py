"""Progress: a caller-driven bar with per-step labels."""

import time

from tapline import Progress, intro, outro

PACKAGES = ["rich", "wcwidth", "pytest", "pytest-asyncio"]


def main() -> None:
    intro("install")
    progress = Progress(style="block", total=len(PACKAGES), size=30)
    progress.start("Resolving packages...")
    for name in PACKAGES:
        time.sleep(0.3)  # Simulate work
        progress.advance(1, f"Installed {name}")
    progress.stop(f"Installed {len(PACKAGES)} packages", 0)
    outro("Done")


if __name__ == "__main__":
    main()
