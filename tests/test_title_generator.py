import unittest

from thumb_studio.src.title_generator import (
    HOOK_TEMPLATES,
    POWER_WORDS,
    apply_suggestion,
    build_thumbnail_prompt,
    generate_titles,
    titles_to_clipboard_text,
)


class TitleGeneratorTests(unittest.TestCase):
    def test_insectos_venenosos_titles_contain_topic(self) -> None:
        titles = generate_titles("insectos venenosos")
        self.assertEqual(len(titles), 5)
        for title in titles:
            self.assertIn("insectos venenosos", title)
        self.assertEqual(titles[0], "Increíble — Los insectos venenosos que no conocías")

    def test_power_words_pair_with_hooks_by_index(self) -> None:
        titles = generate_titles("gatos")
        for index, title in enumerate(titles):
            power, hook = title.split(" — ", 1)
            self.assertEqual(power, POWER_WORDS[index % len(POWER_WORDS)])
            self.assertEqual(hook, HOOK_TEMPLATES[index].format(topic="gatos"))

    def test_generation_is_deterministic(self) -> None:
        self.assertEqual(generate_titles("volcanes"), generate_titles("volcanes"))

    def test_prompt_embeds_topic(self) -> None:
        prompt = build_thumbnail_prompt("tiburones")
        self.assertIn('"tiburones"', prompt)
        self.assertTrue(prompt.startswith("Miniatura para video sobre"))

    def test_apply_suggestion_keeps_five_and_leaves_input_alone(self) -> None:
        titles = generate_titles("ranas")
        updated = apply_suggestion(titles, "ranas venenosas")
        self.assertEqual(updated[0], "¡ranas venenosas!: Guía completa")
        self.assertEqual(updated[1:], titles[:4])
        self.assertEqual(len(titles), 5)

    def test_clipboard_text_is_one_title_per_line(self) -> None:
        titles = generate_titles("arañas")
        self.assertEqual(titles_to_clipboard_text(titles).split("\n"), titles)


if __name__ == "__main__":
    unittest.main()
