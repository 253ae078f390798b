"""
Sprig AST - value types produced by the tree builder.

Every type here is a frozen pydantic model. Variants of a closed union carry a
``kind`` literal so pydantic can discriminate them when validating or dumping.
"""
from typing import Annotated, ClassVar, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from sprig.errors import LeafNodeCantHaveChildren


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ==========================================
# BINDINGS
# ==========================================

class RootIdentifier(_Frozen):
    """Binding to a single top-level property, e.g. ``@items``."""
    kind: Literal["root"] = "root"
    name: str

    @property
    def segments(self) -> Tuple[str, ...]:
        return (self.name,)

    def __str__(self):
        return f"@{self.name}"


class NestedIdentifier(_Frozen):
    """Binding to a property path, e.g. ``@item%title``."""
    kind: Literal["nested"] = "nested"
    segments: Tuple[str, ...] = Field(min_length=2)

    def __str__(self):
        return "@" + "%".join(self.segments)


PropertyBinding = Annotated[Union[RootIdentifier, NestedIdentifier], Field(discriminator="kind")]


def binding_from_segments(segments: Sequence[str]):
    """One segment makes a root identifier, more make a nested one."""
    if len(segments) == 1:
        return RootIdentifier(name=segments[0])
    return NestedIdentifier(segments=tuple(segments))


# ==========================================
# VALUES
# ==========================================

class Text(_Frozen):
    kind: Literal["text"] = "text"
    value: str

    def __str__(self):
        return f'"{self.value}"'


class Number(_Frozen):
    kind: Literal["number"] = "number"
    value: int

    def __str__(self):
        return str(self.value)


class Binding(_Frozen):
    kind: Literal["binding"] = "binding"
    binding: PropertyBinding

    def __str__(self):
        return str(self.binding)


GenericValue = Annotated[Union[Text, Number, Binding], Field(discriminator="kind")]


class NoValue(_Frozen):
    """Attribute declared without ``=value``."""
    kind: Literal["none"] = "none"

    def append(self, value):
        return SingleValue(value=value)

    def __str__(self):
        return "<NONE>"


class SingleValue(_Frozen):
    kind: Literal["single"] = "single"
    value: GenericValue

    def append(self, value):
        return MultipleValues(values=(self.value, value))

    def __str__(self):
        return str(self.value)


class MultipleValues(_Frozen):
    """Accumulated values of an attribute declared more than once (``.a.b``)."""
    kind: Literal["multiple"] = "multiple"
    values: Tuple[GenericValue, ...]

    def append(self, value):
        return MultipleValues(values=self.values + (value,))

    def __str__(self):
        return "{" + ", ".join(str(v) for v in self.values) + "}"


AttributeValue = Annotated[Union[NoValue, SingleValue, MultipleValues], Field(discriminator="kind")]


class Attribute(_Frozen):
    name: str
    value: AttributeValue

    def __str__(self):
        return f"{self.name}={self.value}"


# ==========================================
# TREE NODES
# ==========================================

class _ContainerNode(_Frozen):
    can_have_children: ClassVar[bool] = True

    def with_children(self, nodes):
        """Return a copy of this node with ``nodes`` appended to its children."""
        return self.model_copy(update={"children": self.children + tuple(nodes)})


class _LeafNode(_Frozen):
    can_have_children: ClassVar[bool] = False

    def with_children(self, nodes):
        raise LeafNodeCantHaveChildren(
            f"{type(self).__name__} can't have any children"
        )


class RootNode(_ContainerNode):
    """Pseudo-node holding the top level of a compiled abbreviation."""
    kind: Literal["root"] = "root"
    children: Tuple["TreeNode", ...] = ()


class NormalNode(_ContainerNode):
    kind: Literal["normal"] = "normal"
    name: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple["TreeNode", ...] = ()

    def attribute(self, name) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


class InnerContentNode(_LeafNode):
    kind: Literal["content"] = "content"
    value: GenericValue


class SubtreeNode(_LeafNode):
    """Placeholder for an external subtree bound at ``binding``."""
    kind: Literal["subtree"] = "subtree"
    binding: PropertyBinding


class CollectionNode(_LeafNode):
    """Template nodes repeated once per item of the bound collection."""
    kind: Literal["collection"] = "collection"
    nodes: Tuple["TreeNode", ...]
    collection: PropertyBinding


TreeNode = Annotated[
    Union[RootNode, NormalNode, InnerContentNode, SubtreeNode, CollectionNode],
    Field(discriminator="kind"),
]

RootNode.model_rebuild()
NormalNode.model_rebuild()
CollectionNode.model_rebuild()
