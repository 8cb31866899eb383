"""Subpackage set aside for service contracts; it holds no modules yet."""