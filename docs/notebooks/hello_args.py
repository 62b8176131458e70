# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.16.4
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# %% [markdown]
# # Loading Query Arguments
#
# This notebook shows how a single record type describes both the arguments a
# query accepts and how those arguments are read into typed Python values.
#
# ## Overview
#
# Declare a dataclass whose fields carry argument metadata with
# `argloader.argument`. From that record, an `ArgLoader` can:
#
# - Derive an argument schema (name, wire type, description) for a query engine
# - Populate an instance from the raw argument map the engine passes back
#
# The query engine itself is not part of argloader. Below, a small resolver
# function stands in for it.

# %%
import json
import logging
from dataclasses import dataclass
from typing import Any

from argloader import (
    ArgLoaderError,
    argument,
    export_args_json,
    generate_args_docs,
    new_loader,
)

logging.basicConfig(level=logging.INFO)

# %% [markdown]
# ## Declaring the Record
#
# `name` is required; `greeting` is optional and falls back to the field
# default when the caller omits it.


# %%
@dataclass
class HelloArgs:
    """Arguments of the hello query."""

    name: str = argument("name", required=True, default="", description="Your name")
    greeting: str = argument("greeting", default="", description="How to say hello")


# %% [markdown]
# ## Deriving the Schema
#
# The loader is created explicitly by the application and shared with every
# resolver that needs it.

# %%
loader = new_loader()
schema = loader.args_config(HelloArgs)
for arg_name, config in schema.items():
    print(f"{arg_name}: {config.type.value} ({config.description})")

# %% [markdown]
# ## Resolving a Query
#
# The resolver populates a fresh record from the raw arguments. On error the
# record is discarded: fields processed before the failure may already have
# been written.


# %%
def resolve_hello(raw_args: dict[str, Any]) -> str:
    args = HelloArgs()
    loader.load_args(raw_args, args)
    greeting = args.greeting or "Hello"
    return f"{greeting} {args.name}"


print(resolve_hello({"name": "Joe", "greeting": "Goodbye"}))
print(resolve_hello({"name": "Joe"}))

# %%
for bad_args in ({"greeting": "Hi"}, {"name": 42}):
    try:
        resolve_hello(bad_args)
    except ArgLoaderError as err:
        print(f"{bad_args}: {err}")

# %% [markdown]
# ## Documenting the Arguments

# %%
print(generate_args_docs(HelloArgs, loader))

# %%
print(json.dumps(export_args_json(HelloArgs, loader), indent=2))
