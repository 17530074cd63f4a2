"""Analysis result models mirroring the structured model output."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Quote:
    """A verbatim user quote backing a core point."""

    text: str
    source: str  # user identifier, e.g. "User 1"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Quote":
        return cls(text=data["text"], source=data["source"])

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "source": self.source}


@dataclass
class CorePoint:
    """A recurring viewpoint within one question."""

    label: str
    description: str
    percentage: int
    quotes: List[Quote] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CorePoint":
        return cls(
            label=data["label"],
            description=data["description"],
            percentage=int(data["percentage"]),
            quotes=[Quote.from_dict(q) for q in data["quotes"]],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "description": self.description,
            "percentage": self.percentage,
            "quotes": [q.to_dict() for q in self.quotes],
        }


@dataclass
class QuestionInsight:
    """Per-question breakdown of core points."""

    question: str
    core_points: List[CorePoint] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuestionInsight":
        return cls(
            question=data["question"],
            core_points=[CorePoint.from_dict(p) for p in data["corePoints"]],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question": self.question,
            "corePoints": [p.to_dict() for p in self.core_points],
        }


@dataclass
class UserCluster:
    """A group of respondents with similar answers."""

    name: str
    description: str
    percentage: int
    characteristics: List[str] = field(default_factory=list)
    user_ids: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserCluster":
        return cls(
            name=data["name"],
            description=data["description"],
            percentage=int(data["percentage"]),
            characteristics=list(data["characteristics"]),
            user_ids=list(data["userIds"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "percentage": self.percentage,
            "characteristics": list(self.characteristics),
            "userIds": list(self.user_ids),
        }


@dataclass
class LogicalModule:
    """A titled group of related findings."""

    title: str
    content: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogicalModule":
        return cls(title=data["title"], content=data["content"])

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "content": self.content}


@dataclass
class CoreConclusions:
    """Study-level conclusions."""

    overall_conclusion: str
    logical_modules: List[LogicalModule] = field(default_factory=list)
    actionable_insights: List[str] = field(default_factory=list)
    logic_diagram_mermaid: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CoreConclusions":
        return cls(
            overall_conclusion=data["overallConclusion"],
            logical_modules=[LogicalModule.from_dict(m) for m in data["logicalModules"]],
            actionable_insights=list(data["actionableInsights"]),
            logic_diagram_mermaid=data["logicDiagramMermaid"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallConclusion": self.overall_conclusion,
            "logicalModules": [m.to_dict() for m in self.logical_modules],
            "actionableInsights": list(self.actionable_insights),
            "logicDiagramMermaid": self.logic_diagram_mermaid,
        }


@dataclass
class AnalysisResult:
    """Complete structured analysis of one survey."""

    core_conclusions: CoreConclusions
    question_insights: List[QuestionInsight] = field(default_factory=list)
    user_clusters: List[UserCluster] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        """Build from a payload that has already passed schema validation."""
        return cls(
            core_conclusions=CoreConclusions.from_dict(data["coreConclusions"]),
            question_insights=[QuestionInsight.from_dict(q) for q in data["questionInsights"]],
            user_clusters=[UserCluster.from_dict(c) for c in data["userClusters"]],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire shape for serialization."""
        return {
            "coreConclusions": self.core_conclusions.to_dict(),
            "questionInsights": [q.to_dict() for q in self.question_insights],
            "userClusters": [c.to_dict() for c in self.user_clusters],
        }

    def get_quote_sources(self) -> List[str]:
        """Unique quote sources in first-seen order."""
        sources = {}
        for insight in self.question_insights:
            for point in insight.core_points:
                for quote in point.quotes:
                    sources.setdefault(quote.source, None)
        return list(sources)

    def get_summary_statistics(self) -> Dict[str, Any]:
        """Get counts used for CLI and report summaries."""
        return {
            "logical_modules": len(self.core_conclusions.logical_modules),
            "actionable_insights": len(self.core_conclusions.actionable_insights),
            "questions_analyzed": len(self.question_insights),
            "core_points": sum(len(q.core_points) for q in self.question_insights),
            "quotes": sum(
                len(p.quotes) for q in self.question_insights for p in q.core_points
            ),
            "user_clusters": len(self.user_clusters),
        }
