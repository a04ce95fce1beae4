"""Tests for the generator module: a whole run on a small petstore."""

import pytest

from ngcodegen.config import GeneratorOptions
from ngcodegen.errors import UnsupportedHttpMethodError
from ngcodegen.generator import AngularClientGenerator, SupportingFile
from ngcodegen.naming import TypeScriptNaming

_SPEC: dict = {
    "paths": {
        "/pet/{petId}": {
            "get": {
                "tags": ["pet"],
                "operationId": "getPetById",
                "parameters": [{"name": "petId", "in": "path", "required": True, "schema": {"type": "integer"}}],
                "responses": {"200": {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}}}},
            },
            "delete": {
                "tags": ["pet"],
                "parameters": [{"name": "petId", "in": "path", "required": True, "schema": {"type": "integer"}}],
                "responses": {"200": {"description": "OK"}},
            },
        },
        "/store/order": {
            "post": {
                "tags": ["store"],
                "requestBody": {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/Order"}}}},
                "responses": {"200": {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/Order"}}}}},
            },
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "properties": {
                    "category": {"$ref": "#/components/schemas/Category"},
                    "parent": {"$ref": "#/components/schemas/Pet"},
                },
            },
            "Category": {"type": "object", "properties": {"name": {"type": "string"}}},
            "Order": {"type": "object", "properties": {"pet": {"$ref": "#/components/schemas/Pet"}}},
        },
    },
}


def _paths(destinations):
    return {f.path for f in destinations}


class TestAngularClientGenerator:
    """Test the per-run plans."""

    def test_defaults(self):
        gen = AngularClientGenerator()
        assert str(gen.flags.ng_version) == "6.0.0"
        assert gen.name == "typescript-angular"

    def test_base_supporting_files(self):
        paths = _paths(AngularClientGenerator.from_properties({}).supporting_files())
        assert paths == {
            "model/models.ts", "api/api.ts", "index.ts", "api.module.ts",
            "configuration.ts", "variables.ts", "encoder.ts",
            ".gitignore", ".npmignore", "git_push.sh",
        }

    def test_rxjs_operators_for_old_angular(self):
        paths = _paths(AngularClientGenerator.from_properties({"ngVersion": "4.0.0"}).supporting_files())
        assert "rxjs-operators.ts" in paths

    def test_no_rxjs_operators_for_http_client(self):
        paths = _paths(AngularClientGenerator.from_properties({"ngVersion": "4.3.0"}).supporting_files())
        assert "rxjs-operators.ts" not in paths

    def test_package_files(self):
        paths = _paths(AngularClientGenerator.from_properties({"npmName": "pkg"}).supporting_files())
        assert {"README.md", "package.json", "typings.json", "tsconfig.json"} <= paths
        assert "ng-package.json" not in paths

    def test_ng_packagr_file(self):
        gen = AngularClientGenerator.from_properties({"npmName": "pkg", "ngVersion": "8.0.0"})
        assert "ng-package.json" in _paths(gen.supporting_files())

    def test_ng_packagr_needs_package(self):
        gen = AngularClientGenerator.from_properties({"ngVersion": "8.0.0"})
        assert "ng-package.json" not in _paths(gen.supporting_files())

    def test_nested_model_package(self):
        gen = AngularClientGenerator(naming=TypeScriptNaming(model_package="client.model", api_package="client.api"))
        paths = _paths(gen.supporting_files())
        assert "client/model/models.ts" in paths
        assert "client/index.ts" in paths

    def test_interface_templates(self):
        gen = AngularClientGenerator.from_properties({"withInterfaces": "true"})
        assert gen.api_template_files() == {"api.service.mustache": ".ts", "apiInterface.mustache": "Interface.ts"}

    def test_no_interface_templates(self):
        assert AngularClientGenerator().api_template_files() == {"api.service.mustache": ".ts"}

    def test_template_properties(self):
        gen = AngularClientGenerator(GeneratorOptions.from_properties({"npmName": "pkg", "ngVersion": "4.3"}))
        props = gen.template_properties()
        assert props["npmName"] == "pkg"
        assert props["npmVersion"] == "1.0.0"
        assert props["useHttpClient"] is True
        assert props["useHttpClientPackage"] is True
        assert props["injectionToken"] == "InjectionToken"

    def test_supporting_file_path(self):
        assert SupportingFile("gitignore", "", ".gitignore").path == ".gitignore"
        assert SupportingFile("apis.mustache", "api", "api.ts").path == "api/api.ts"


class TestBuildContext:
    """Test the full post-processing run."""

    @classmethod
    def setup_class(cls):
        """Parse the petstore and build the context once for all tests."""
        cls.gen = AngularClientGenerator.from_properties({"ngVersion": "4.0.0"})
        cls.ctx = cls.gen.from_openapi(_SPEC)
        cls.apis = {api["classname"]: api for api in cls.ctx["apis"]}

    def test_services(self):
        assert list(self.apis) == ["PetService", "StoreService"]

    def test_api_filenames(self):
        assert self.apis["PetService"]["apiFilename"] == "pet.service"
        assert self.apis["StoreService"]["apiFilename"] == "store.service"

    def test_legacy_methods(self):
        methods = [op.http_method for op in self.apis["PetService"]["operations"]]
        assert methods == ["RequestMethod.Get", "RequestMethod.Delete"]

    def test_paths_rewritten(self):
        op = self.apis["PetService"]["operations"][0]
        assert op.path == "/pet/${encodeURIComponent(String(petId))}"

    def test_generated_operation_id(self):
        assert self.apis["PetService"]["operations"][1].operation_id == "petPetIdDelete"

    def test_service_imports_deduplicated(self):
        imports = self.apis["StoreService"]["imports"]
        assert imports == [{"import": "model/Order", "filename": "model/Order", "classname": "Order"}]

    def test_model_imports_without_self(self):
        models = {entry["model"].classname: entry for entry in self.ctx["models"]}
        assert models["Pet"]["tsImports"] == [{"classname": "Category", "filename": "Category"}]
        assert models["Order"]["tsImports"] == [{"classname": "Pet", "filename": "Pet"}]
        assert models["Category"]["tsImports"] == []

    def test_plans_included(self):
        assert "rxjs-operators.ts" in _paths(self.ctx["supportingFiles"])
        assert self.ctx["modelTemplateFiles"] == {"model.mustache": ".ts"}
        assert self.ctx["properties"]["useHttpClient"] is False


class TestFromOpenapi:
    """Test document-level parsing."""

    def test_untagged_operations_use_default_service(self):
        document = {"paths": {"/ping": {"get": {}, "parameters": [], "summary": "Health"}}}
        ctx = AngularClientGenerator.from_properties({"ngVersion": "8.0.0"}).from_openapi(document)
        assert [api["classname"] for api in ctx["apis"]] == ["DefaultService"]
        assert ctx["apis"][0]["apiFilename"] == "default.service"
        assert ctx["apis"][0]["operations"][0].operation_id == "pingGet"
        assert ctx["models"] == []

    def test_parse_document_models(self):
        operations, models = AngularClientGenerator().parse_document(_SPEC)
        assert list(operations) == ["pet", "store"]
        assert [m.classname for m in models] == ["Pet", "Category", "Order"]

    def test_trace_fatal_for_legacy_client(self):
        document = {"paths": {"/pets": {"trace": {"tags": ["pet"]}}}}
        gen = AngularClientGenerator.from_properties({"ngVersion": "4.0.0"})
        with pytest.raises(UnsupportedHttpMethodError):
            gen.from_openapi(document)
