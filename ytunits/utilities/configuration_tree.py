class ConfigNode:
    """A section of the configuration, holding sub-sections and leaves."""

    def __init__(self, key, parent=None):
        self.key = key
        self.children = {}
        self.parent = parent

    def __repr__(self):
        return f"<Node {self.key}>"

    def __contains__(self, item):
        return item in self.children

    def update(self, other, extra_data=None):
        stack = [([], other)]
        while stack:
            keys, values = stack.pop()
            for key, val in values.items():
                if isinstance(val, dict):
                    stack.append((keys + [key], val))
                else:
                    self.upsert_from_list(keys + [key], val, extra_data)

    def get_child(self, key, constructor=None):
        try:
            return self.children[key]
        except KeyError:
            if constructor is None:
                raise KeyError(f"Cannot get key {key}") from None
        child = self.children[key] = constructor()
        return child

    def add_child(self, key):
        return self.get_child(key, lambda: ConfigNode(key, parent=self))

    def remove_child(self, key):
        self.children.pop(key)

    def upsert_from_list(self, keys, value, extra_data=None):
        *node_keys, leaf_key = keys
        node = self
        for key in node_keys:
            node = node.add_child(key)
            if not isinstance(node, ConfigNode):
                raise RuntimeError(f"Expected a ConfigNode, got {node}!")
        if leaf_key not in node.children:
            node.children[leaf_key] = ConfigLeaf(
                leaf_key, parent=node, value=value, extra_data=extra_data
            )
            return
        leaf = node.children[leaf_key]
        if not isinstance(leaf, ConfigLeaf):
            raise RuntimeError(f"Expected a ConfigLeaf, got {leaf}!")
        leaf.value = value
        leaf.extra_data = extra_data

    def get_from_list(self, key_list):
        node = self
        for key in key_list:
            if not isinstance(node, ConfigNode):
                raise KeyError(f"Cannot get key {key} below leaf {node.key}")
            node = node.get_child(key)
        return node

    def get(self, *keys):
        return self.get_from_list(keys)

    def pop_leaf(self, keys):
        *node_keys, leaf_key = keys
        self.get_from_list(node_keys).children.pop(leaf_key)

    def sections(self):
        """Yield ``(key, node)`` for every sub-section directly below this one."""
        for key, child in self.children.items():
            if isinstance(child, ConfigNode):
                yield key, child

    def as_dict(self, callback=lambda leaf: leaf.value):
        # sections with no leaf anywhere below them are left out
        data = {}
        for key, child in self.children.items():
            if isinstance(child, ConfigLeaf):
                data[key] = callback(child)
                continue
            child_data = child.as_dict(callback)
            if child_data:
                data[key] = child_data
        return data


class ConfigLeaf:
    """A single option. Its type is set by the first value it is given."""

    def __init__(self, key, parent: ConfigNode, value, extra_data=None):
        self.key = key
        self.parent = parent
        self._value = value
        self.extra_data = extra_data

    def __repr__(self):
        return f"<Leaf {self.key}: {self.value}>"

    @property
    def path(self):
        """The dotted name of the option, e.g. ``ytunits.log_level``."""
        keys = []
        node = self
        while node is not None:
            if node.key:
                keys.append(node.key)
            node = node.parent
        return ".".join(reversed(keys))

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, new_value):
        if type(new_value) is type(self._value):
            self._value = new_value
            return
        msg = (
            f"Error when setting {self.path}.\n"
            f"Tried to assign a value of type {type(new_value)}, "
            f"expected type {type(self._value)}."
        )
        source = (self.extra_data or {}).get("source")
        if source:
            msg += f"\nThis entry was last modified in {source}."
        raise TypeError(msg)
