import unittest

from path_setup import ensure_src_path

ensure_src_path()


class PackageEntrypointTests(unittest.TestCase):
    def test_package_reexports_public_api(self) -> None:
        import grounded_report

        self.assertTrue(callable(grounded_report.ReportPipeline))
        self.assertTrue(callable(grounded_report.PipelineConfig))
        self.assertTrue(callable(grounded_report.RetryingGenerator))

        self.assertTrue(callable(grounded_report.chunk_text))
        self.assertTrue(callable(grounded_report.parse_fact_blocks))
        self.assertTrue(callable(grounded_report.rank_facts))
        self.assertTrue(callable(grounded_report.assemble))

        self.assertTrue(callable(grounded_report.OpenAIBackendConfig))
        self.assertTrue(callable(grounded_report.OpenAILLMModel))
        self.assertTrue(issubclass(grounded_report.GenerationError, grounded_report.ReportSynthesisError))

    def test_subpackages_share_objects(self) -> None:
        import grounded_report
        from grounded_report import backends, pipelines, prompts

        self.assertIs(pipelines.ReportPipeline, grounded_report.ReportPipeline)
        self.assertIs(backends.OpenAILLMModel, grounded_report.OpenAILLMModel)
        self.assertIs(prompts.render_outline_prompt, grounded_report.prompts.render_outline_prompt)

    def test_core_namespaces_expose_contracts(self) -> None:
        import grounded_report
        from grounded_report.core import config, protocols, types

        self.assertIs(config.PipelineConfig, grounded_report.PipelineConfig)
        self.assertIs(protocols.LLMModel, grounded_report.LLMModel)
        self.assertIs(types.Fact, grounded_report.Fact)


if __name__ == "__main__":
    unittest.main()
