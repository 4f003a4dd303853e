"""Namespace for chat model backends; none are included yet."""