from __future__ import annotations

from pathlib import Path

def main():
    root = Path("demo_packs")

    good = root / "Research"
    (good / "src" / "skills" / "Research").mkdir(parents=True, exist_ok=True)
    (good / "src" / "agents").mkdir(parents=True, exist_ok=True)
    (good / "README.md").write_text(
        "# Research\n\n## Overview\nDemo pack.\n\n## What This Pack Provides\n- A skill\n",
        encoding="utf-8",
    )
    (good / "INSTALL.md").write_text(
        "# Installation: Research\n\n## Prerequisites\n\n## Installation Steps\n\n## Post-Installation\n",
        encoding="utf-8",
    )
    (good / "VERIFY.md").write_text(
        "# Verify\n\n## Step 1\nVerify the skill loads.\n\n```powershell\nGet-ChildItem $env:PAI_DIR\n```\n",
        encoding="utf-8",
    )
    (good / "src" / "skills" / "Research" / "SKILL.md").write_text(
        "---\nname: Research\ndescription: Demo skill\nversion: 1.0.0\n---\n", encoding="utf-8"
    )
    (good / "src" / "agents" / "Researcher.md").write_text(
        "---\nname: Researcher\ndescription: Demo agent\ninstruction: Be thorough\n---\n", encoding="utf-8"
    )

    # Same layout minus VERIFY.md
    broken = root / "Broken"
    (broken / "src" / "skills" / "Notes").mkdir(parents=True, exist_ok=True)
    (broken / "INSTALL.md").write_text("# Installation: Broken\n", encoding="utf-8")
    (broken / "src" / "skills" / "Notes" / "SKILL.md").write_text(
        "---\nname: Notes\n---\nchmod +x notes.sh\n", encoding="utf-8"
    )

    print(f"Created demo packs at: {root.resolve()}")
    print("Try: packcheck --all --packs-dir demo_packs")

if __name__ == "__main__":
    main()
