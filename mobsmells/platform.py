from enum import Enum
from typing import Optional


class Platform(Enum):
    def __init__(self, key: str, label: str):
        self.key = key
        self.label = label

    android = "android", "Android"
    ios = "ios", "iOS"

    @staticmethod
    def from_label(label: str) -> Optional["Platform"]:
        for p in Platform:
            if p.label.lower() == label.strip().lower():
                return p
        return None

    @staticmethod
    def from_key(key: str) -> Optional["Platform"]:
        for p in Platform:
            if p.key == key:
                return p
        return None


class Group(Enum):
    def __init__(self, key: str, label: str):
        self.key = key
        self.label = label

    environmental = "environmental", "Environmental"
    social = "social", "Social"

    @staticmethod
    def from_label(label: str) -> Optional["Group"]:
        for g in Group:
            if g.label.lower() == label.strip().lower():
                return g
        return None


class Category(Enum):
    def __init__(self, label: str, group: Group):
        self.label = label
        self.group = group

    # Environmental
    optimized_api = "Optimized API", Group.environmental
    leakage = "Leakage", Group.environmental
    bottleneck = "Bottleneck", Group.environmental
    sobriety = "Sobriety", Group.environmental
    idleness = "Idleness", Group.environmental
    power = "Power", Group.environmental
    batch = "Batch", Group.environmental
    release = "Release", Group.environmental
    # Social
    privacy = "Privacy", Group.social
    gdpr = "GDPR", Group.social
    inclusion = "Inclusion", Group.social

    @property
    def key(self) -> str:
        return self.name

    @staticmethod
    def from_label(label: str) -> Optional["Category"]:
        for c in Category:
            if c.label.lower() == label.strip().lower():
                return c
        return None

    @staticmethod
    def of_group(group: Group) -> list["Category"]:
        return [c for c in Category if c.group == group]
