"""Platform-specific installation guidance for missing binaries.

Pure text generation. The caller decides whether to display it.
"""

from __future__ import annotations

from collections.abc import Sequence

GENERIC_GUIDANCE = "Please install these manually for your platform."


# ---------------------------------------------------------------------------
# Package-manager commands
# ---------------------------------------------------------------------------

def platform_install_commands(
    platform: str, missing: Sequence[str],
) -> tuple[tuple[str, str], ...]:
    """Return ``(label, command)`` pairs for installing *missing* on *platform*.

    Unknown platforms get an empty tuple.
    """
    deps = " ".join(missing)
    if platform == "macos":
        return (
            ("Install using Homebrew", f"brew install {deps}"),
            ("Or using MacPorts", f"sudo port install {deps}"),
            ("Or using Nix", " ".join(f"nix profile install nixpkgs#{d}" for d in missing)),
        )
    if platform == "linux":
        return (
            ("Debian/Ubuntu", f"sudo apt install {deps}"),
            ("Fedora", f"sudo dnf install {deps}"),
            ("Arch Linux", f"sudo pacman -S {deps}"),
        )
    if platform == "windows":
        return (
            ("Using Scoop", f"scoop install {deps}"),
            ("Using Chocolatey", f"choco install {deps}"),
            ("Using winget", "; ".join(f"winget install {d}" for d in missing)),
        )
    return ()


def install_instructions(platform: str, missing: Sequence[str]) -> str:
    """Render remediation text for *missing* binaries.

    Returns an empty string when nothing is missing.
    """
    if not missing:
        return ""

    sections = [f"Missing dependencies: {', '.join(missing)}"]
    if platform == "windows":
        sections.append(
            "These should be bundled with the installer.\n"
            "Try reinstalling the application, or install manually:"
        )

    commands = platform_install_commands(platform, missing)
    if not commands:
        sections.append(GENERIC_GUIDANCE)
    sections.extend(f"{label}:\n{command}" for label, command in commands)
    return "\n\n".join(sections)
