# deplens

deplens reads dependency manifests and the data that package registries return. It gives
editor tooling what it needs to show versions, hover details and diagnostics for the
dependencies listed in a project.

## Installing

```
pip install deplens
```

It runs on Python 3.10 and later and needs no other packages.

## What it reads

- `Cargo.toml`, through `deplens.parser.cargo_toml.query_cargo_toml_dependencies`. It reads
  `[dependencies]`, `[dev-dependencies]` and `[build-dependencies]`, and accepts the
  underscore spellings of the last two. Each entry is given with its version and features,
  in document order. An entry that has a name but no value yet is still reported; its
  `spec` is `None`.
- `package.json`, through `deplens.parser.package_json.query_package_json_dependencies`. It
  reads `dependencies`, `devDependencies`, `peerDependencies`, `optionalDependencies`,
  `bundleDependencies` and `bundledDependencies`, and sorts the results by position. A value
  that starts with `git` or ends in `.git` is a git source. A value that starts with
  `file:`, `./` or `../` is a path source. Any other value is a registry version.
- `wally.toml`, through `deplens.parser.wally_toml.query_wally_toml_dependencies`. It reads
  `[dependencies]`, `[dev-dependencies]` and `[server-dependencies]`, written as
  `scope/name@version`.
- `rokit.toml`, through `deplens.parser.rokit_toml.query_rokit_toml_dependencies`. It reads
  `[tools]`, written as `author/name@version`.

The readers are built on the scanners `deplens.parser.toml_scan.scan_toml` and
`deplens.parser.json_scan.scan_json`. These never raise. Unclosed strings, tables and
arrays are closed where the input stops, so a file can still be read while it is being
typed.

Every dependency keeps the line and character range of its name, version and spec, as
`deplens.parser.positions.Position` and `Range`. `find_at_pos` in `deplens.parser.structs`
returns the entry under the cursor.

## Parsing a manifest

```python
from deplens.parser.document import ManifestDocument
from deplens.parser.cargo_toml import query_cargo_toml_dependencies

doc = ManifestDocument.from_file("Cargo.toml", '[dependencies]\ntokio = "1.25.0"\n')
for dep in query_cargo_toml_dependencies(doc):
    print(dep.kind, dep.name.contents, dep.raw_version_string())
```

`Language.from_file_name` picks the language from the file name. Known manifest names are
matched first (`package.json`, `Cargo.toml`, `Cargo.lock`, `wally.toml`, `wally.lock`,
`rokit.toml`, `aftman.toml`), then the `.json` or `.toml` extension.
`ManifestDocument.from_uri` and `ManifestDocument.from_file` return `None` when neither
matches.

`ParsedSpec.from_node` and `SimpleDependency.parsed_spec()` split tool and Wally specs into
author, name and version. Each part keeps its own range. A part that is still empty gets a
zero-length range at the end of the spec. `ParsedSpec.into_full()` returns a
`ParsedSpecFull` once every part is present.

## Registry data

- `deplens.clients.crates` reads sparse-index lines (`IndexMetadata.try_from_lines`) and
  crates.io responses (`CrateDataSingle`, `CrateDataMulti`). It also builds request URLs
  with `sparse_index_url`, `crate_data_url` and `crate_search_url`.
- `deplens.clients.npm` reads registry documents with `RegistryMetadata.from_json`. In the
  result, each version takes its key as its version string. `repository_url` expands the
  `github:`, `gitlab:` and `bitbucket:` shorthands. `registry_url` builds the package URL.
- `deplens.clients.github` reads git trees (`GitTreeRoot`), releases (`RepositoryRelease`)
  and community metrics (`RepositoryMetrics`).
- `deplens.clients.wally` reads index configs, owners files and package metadata lines.
  `MetadataRealm.get_suggested_realm` suggests a better section for a dependency.
  `parse_index_url` takes the owner and repository from a GitHub index URL and raises
  `IndexUrlError` when it cannot.

Malformed data raises `ValueError`.

## Server building blocks

`deplens.server` holds pieces for a language server:

- `document.Document` holds the text of an open document and maps between string offsets
  and UTF-16 positions. It applies `TextChange`s, whole or ranged, and creates `TextEdit`s,
  including `create_substring_edit` for a substring on a given line.
- `transport.Transport` stands for stdio or a TCP socket on `127.0.0.1`.
  `open_streams()` returns an asyncio reader and writer for it.
- `waiting.Waiting` lets requests wait, as asyncio futures, until a URI is triggered.
- `conversion.convert_to_utf8` decodes file contents and raises `OSError` on invalid UTF-8
  or a path with no file name.

## What it does not do

deplens makes no network requests. The client modules describe registry responses and
build URLs; fetching, caching and rate limiting are left to the caller. It does not speak
the language server protocol and has no server loop. It provides no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```