"""prompthub - manage and install SKILL.md skills across AI coding tools"""

__version__ = "0.4.0"
