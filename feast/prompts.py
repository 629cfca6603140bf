SYSTEM_PROMPT = """
You are a world-class, creative, and detail-oriented assistant for suggesting
delicious and inspiring recipes.
Every recipe you suggest is another opportunity to delight and amaze your users.
Your users are competent chefs but are not professionals.
They do not necessarily have access to all the equipment a recipe may require.
""".strip()


SUGGEST_RECIPES_PROMPT = """
Given the following ingredients, suggest a few recipes that can be made.

Ingredients: {ingredients}

Recipes should include a title, a brief description, the preparation steps,
and a link to the full recipe.

Output in JSON format, like this:

{{"recipes": [{{"title": "...", "description": "...", "steps": ["...", "..."], "link": "https://..."}}]}}
""".strip()


RECIPE_DESCRIPTION_PROMPT = """
You are a recipe expert. Generate a brief, engaging description for the following
recipe, highlighting its key flavors and ingredients.

Recipe Title: {title}
Ingredients: {ingredients}

Respond only with the description.
""".strip()


ALTERNATE_INGREDIENT_PROMPT = """
You are an expert chef providing cooking advice. A user is making a recipe and
needs an alternative for a specific ingredient.

Recipe Details:
Title: {title}
Description: {description}
Steps:
{steps}

Ingredient to Replace: "{ingredient}"

Your task is to suggest a suitable alternative. Your response should:
1. Identify the "original_ingredient" as "{ingredient}".
2. Provide a "suggested_alternative". This should be a common and reasonable
substitute. Include quantity if it's different or important
(e.g., "1/2 tsp of paprika instead of 1 tsp of chili powder").
3. In "notes", briefly explain any significant impact on flavor or texture, any
necessary preparation for the alternative, or if it's generally not advisable to
substitute the ingredient. If no good alternative exists, explain why.

Output in JSON format with the keys "original_ingredient", "suggested_alternative"
and "notes".
""".strip()


RECIPE_IMAGE_PROMPT = (
    "Photorealistic image of a cooked dish: {title}. {description}. "
    "Food photography style, well-lit."
)

DEFAULT_IMAGE_TITLE = "a delicious looking dish"
DEFAULT_IMAGE_DESCRIPTION = "A beautifully prepared meal, ready to eat"
MAX_IMAGE_DESCRIPTION = 150


def one_line(text: str | None) -> str:
    return " ".join((text or "").split())


class SuggestRecipesPrompt:
    def __init__(self, ingredients: str, *, template: str | None = None) -> None:
        self.ingredients = ingredients
        self.template = SUGGEST_RECIPES_PROMPT if template is None else template

    def __str__(self) -> str:
        return self.template.format(ingredients=self.ingredients)


class RecipeDescriptionPrompt:
    def __init__(self, title: str, ingredients: str) -> None:
        self.title = title
        self.ingredients = ingredients

    def __str__(self) -> str:
        return RECIPE_DESCRIPTION_PROMPT.format(
            title=self.title, ingredients=self.ingredients
        )


class AlternateIngredientPrompt:
    def __init__(
        self,
        *,
        title: str,
        description: str,
        steps: tuple[str, ...],
        ingredient: str,
    ) -> None:
        self.title = title
        self.description = description
        self.steps = steps
        self.ingredient = ingredient

    def __str__(self) -> str:
        return ALTERNATE_INGREDIENT_PROMPT.format(
            title=self.title,
            description=self.description,
            steps="\n".join(f"- {step}" for step in self.steps),
            ingredient=self.ingredient,
        )


class RecipeImagePrompt:
    """Image prompt for a dish.

    Newlines are flattened, blanks fall back to something appetising, and the
    description is cut short so the prompt stays simple.
    """

    def __init__(self, title: str | None, description: str | None) -> None:
        self.title = one_line(title) or DEFAULT_IMAGE_TITLE
        description = one_line(description) or DEFAULT_IMAGE_DESCRIPTION
        if len(description) > MAX_IMAGE_DESCRIPTION:
            description = description[: MAX_IMAGE_DESCRIPTION - 3] + "..."
        self.description = description

    def __str__(self) -> str:
        return RECIPE_IMAGE_PROMPT.format(title=self.title, description=self.description)
