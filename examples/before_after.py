"""
Before/after compression example.

Shows the default compression on a sample prompt and the token savings it
buys under a completion model's tokenizer.
"""

from diet_prompt import build, compress

MODEL = "gpt-3.5-turbo"

ORIGINAL_PROMPT = (
    "I want you to act as an advertiser. You will create a campaign to promote "
    "a product or service of your choice. You will choose a target audience, "
    "develop key messages and slogans, select the media channels for promotion, "
    "and decide on any additional activities needed to reach your goals. My "
    "first suggestion request is 'I need help creating an advertising campaign "
    "for a new type of energy drink targeting young adults aged 18-30.'"
)

if __name__ == "__main__":
    print("=" * 60)
    print("DIET PROMPT — BEFORE / AFTER")
    print("=" * 60)

    acct = build(MODEL, ORIGINAL_PROMPT)
    stats = acct.summary()

    print(f"\n📝 Original:     {stats['original_tokens']:,} tokens, {stats['original_cost']:,} chars")
    print(f"📦 Compressed:   {stats['compressed_tokens']:,} tokens, {stats['compressed_cost']:,} chars")
    print(f"💰 Savings:      {stats['savings_pct']}% ({stats['tokens_saved']} tokens)")

    print("\n" + "-" * 60)
    print("Full measurement:")
    for k, v in stats.items():
        print(f"  {k}: {v}")

    print("\n" + "=" * 60)
    print("COMPRESSED OUTPUT:")
    print("=" * 60)
    print(compress(ORIGINAL_PROMPT))
