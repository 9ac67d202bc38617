# ==============================================
# Doctrine entity emitter
# ==============================================
#
# PURPOSE:
#   Map each ClassificationResult to an ORM column definition and
#   render it as PHP attribute + property lines, or as a whole
#   entity class.
#
# TYPE MAPPING:
# -------------
#   ResolvedType    Doctrine         PHP
#   STRING       →  Types::STRING    string   (+ length)
#   TEXT         →  Types::TEXT      string
#   INTEGER      →  Types::INTEGER   int
#   FLOAT        →  Types::FLOAT     float
#   BOOLEAN      →  Types::BOOLEAN   bool
#   ARRAY        →  Types::JSON      array
#
#   An integer primary key is also #[ORM\GeneratedValue].
#
# ENTITY CLASS:
# -------------
#   render_entity("App\Entity\Movie", columns) gives a final class in
#   namespace App\Entity, mapped with
#     #[ORM\Entity(repositoryClass: \App\Entity\Repository\MovieRepository::class)]
#   unless another repository class is passed. Nothing is written
#   to disk; callers decide where the text goes.
#
# ==============================================

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from profilegen.analysis.decision import ClassificationReport, ResolvedType
from profilegen.emitters.naming import FieldNameFormatter
from profilegen.exceptions import InvalidClassNameError

DOCTRINE_TYPES: Dict[ResolvedType, Tuple[str, str]] = {
    ResolvedType.STRING: ("STRING", "string"),
    ResolvedType.TEXT: ("TEXT", "string"),
    ResolvedType.INTEGER: ("INTEGER", "int"),
    ResolvedType.FLOAT: ("FLOAT", "float"),
    ResolvedType.BOOLEAN: ("BOOLEAN", "bool"),
    ResolvedType.ARRAY: ("JSON", "array"),
}

PHP_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


@dataclass(frozen=True)
class ColumnDefinition:
    """One entity property and its column mapping."""

    field_name: str
    property_name: str
    doctrine_type: str
    php_type: str
    nullable: bool = True
    length: Optional[int] = None
    is_id: bool = False

    @property
    def is_generated(self) -> bool:
        return self.is_id and self.doctrine_type == "INTEGER"

    def attributes(self) -> List[str]:
        """PHP attribute lines, e.g. #[ORM\\Column(type: Types::STRING, length: 80)]."""
        lines = []
        if self.is_id:
            lines.append("#[ORM\\Id]")
        if self.is_generated:
            lines.append("#[ORM\\GeneratedValue]")

        args = [f"type: Types::{self.doctrine_type}"]
        if self.length is not None and self.doctrine_type == "STRING":
            args.append(f"length: {self.length}")
        if self.nullable:
            args.append("nullable: true")
        lines.append(f"#[ORM\\Column({', '.join(args)})]")
        return lines

    def declaration(self) -> str:
        # Properties start out null until hydrated, the id included
        return f"public ?{self.php_type} ${self.property_name} = null;"

    def render(self, indent: str = "    ") -> str:
        return "\n".join(indent + line for line in self.attributes() + [self.declaration()])

    def to_dict(self):
        return {
            "field": self.field_name,
            "property": self.property_name,
            "type": f"Types::{self.doctrine_type}",
            "phpType": self.php_type,
            "nullable": self.nullable,
            "length": self.length,
            "id": self.is_id,
            "generated": self.is_generated,
        }


def build_columns(
    report: ClassificationReport,
    formatter: Optional[FieldNameFormatter] = None,
) -> List[ColumnDefinition]:
    """
    Column definitions for every classified field, primary key first.

    Raises:
        NameCollisionError: two fields would become the same property
    """
    formatter = formatter or FieldNameFormatter()
    properties = formatter.attribute_names(report.results)

    columns = []
    for name, result in report.results.items():
        doctrine_type, php_type = DOCTRINE_TYPES[result.resolved_type]
        columns.append(ColumnDefinition(
            field_name=name,
            property_name=properties[name],
            doctrine_type=doctrine_type,
            php_type=php_type,
            nullable=result.nullable,
            length=result.length if result.resolved_type == ResolvedType.STRING else None,
            is_id=result.is_primary_key,
        ))
    columns.sort(key=lambda c: not c.is_id)
    return columns


def render_properties(columns: List[ColumnDefinition]) -> str:
    """Property blocks for an entity class body, blank line between each."""
    return "\n\n".join(column.render() for column in columns)


def split_class_name(class_name: str) -> Tuple[str, str]:
    """
    "App\\Entity\\Movie" -> ("App\\Entity", "Movie").

    Raises:
        InvalidClassNameError: not fully qualified, or not valid PHP names
    """
    name = class_name.strip().lstrip("\\")
    if "\\" not in name:
        raise InvalidClassNameError(
            f"Class name '{class_name}' must be fully qualified (e.g. \"App\\Entity\\Movie\")"
        )
    parts = name.split("\\")
    if not all(PHP_IDENTIFIER.match(part) for part in parts):
        raise InvalidClassNameError(f"Class name '{class_name}' is not a valid PHP class name")
    return "\\".join(parts[:-1]), parts[-1]


def default_repository_class(class_name: str) -> str:
    namespace, short_name = split_class_name(class_name)
    return f"{namespace}\\Repository\\{short_name}Repository"


def render_entity(
    class_name: str,
    columns: List[ColumnDefinition],
    repository_class: Optional[str] = None,
    source: Optional[str] = None,
) -> str:
    """
    Source of a final Doctrine entity class.

    Args:
        class_name: Fully-qualified entity class, e.g. "App\\Entity\\Movie"
        columns: Output of build_columns()
        repository_class: Repository FQCN, derived from class_name if None
        source: Input the entity was generated from, for the class comment

    Returns:
        The PHP file contents
    """
    namespace, short_name = split_class_name(class_name)
    if repository_class is None:
        repository_class = default_repository_class(class_name)
    else:
        repository_class = "\\".join(split_class_name(repository_class))

    lines = [
        "<?php",
        "",
        "declare(strict_types=1);",
        "",
        f"namespace {namespace};",
        "",
        "use Doctrine\\DBAL\\Types\\Types;",
        "use Doctrine\\ORM\\Mapping as ORM;",
        "",
    ]
    if source:
        lines += ["/**", f" * Auto-generated from {source} by profilegen.", " */"]
    lines += [
        f"#[ORM\\Entity(repositoryClass: \\{repository_class}::class)]",
        f"final class {short_name}",
        "{",
    ]
    if columns:
        lines.append(render_properties(columns))
    lines += ["}", ""]
    return "\n".join(lines)
