"""Pytest configuration and fixtures.

The design system fixture is one dict of ``relative path -> text`` laid out
the way the default ``paths`` config expects, so the same tree can be served
from memory (MemoryFileSource) or written to a temporary directory.
"""

import json
import sqlite3
from pathlib import Path

import pytest

from designindex.indexer.core import MemoryFileSource
from designindex.indexer.database import create_database_schema

TOKENS = "design-system/packages/tokens"
STYLES = "design-system/packages/styles"
VUE = "vue/src/components"
REACT = "react/src/components"
DOCS = "design-system/src/docs"
ICONS = "design-system/packages/icons/js/icons.js"


def _json(data) -> str:
    return json.dumps(data, indent=2)


DESIGN_SYSTEM = {
    # ------------------------------------------------------------------ tokens
    f"{TOKENS}/properties/color/primary.json": _json({
        "color": {
            "primary-01": {
                "100": {"value": "#78be20"},
                "500": {"value": "#188803", "description": "Main brand color"},
            },
            "grey": {"000": {"value": "#ffffff"}},
        }
    }),
    f"{TOKENS}/properties/shadow/shadow.json": _json({
        "shadow": {
            "s": {
                "x": {"value": "0"},
                "y": {"value": "1px"},
                "blur": {"value": "5px"},
                "spread": {"value": "0"},
                "opacity": {"value": "0.2"},
            }
        }
    }),
    f"{TOKENS}/properties/border/border.json": _json({"border": {"s": {"value": "1px"}}}),
    f"{TOKENS}/properties/radius/radius.json": _json({"radius": {"m": {"value": "4px"}}}),
    f"{TOKENS}/properties/size/screens.json": _json({"screen": {"m": {"value": "680px"}}}),
    f"{TOKENS}/properties/size/font.json": _json({
        "size": {
            "font": {"100": {"value": "0.75rem"}},
            "line": {"100": {"s": {"value": "1rem"}}},
        }
    }),
    f"{TOKENS}/properties/size/grid.json": _json({
        "size": {"gutter": {"screen": {"s": {"value": "1mu"}}}}
    }),
    f"{TOKENS}/properties/size/base.json": _json({
        "magic-unit": {"value": "1"},
        "local-rem-value": {"value": "16px"},
    }),
    # ------------------------------------------------------------------ styles
    f"{STYLES}/settings-tools/_s.magic-unit.scss": "$mu100: 1rem;\n",
    # ------------------------------------------------------------------ vue
    f"{VUE}/button/MButton.vue": """<template>
  <button :class="['mc-button', `mc-button--${size}`]" @click="onClick">
    <slot name="icon" />
    <slot />
  </button>
</template>

<script setup lang="ts">
const props = withDefaults(defineProps<{
  /** Button size */
  size?: 's' | 'm' | 'l';
  disabled?: boolean;
  label: string;
}>(), {
  size: 'm',
  disabled: false,
});

const emit = defineEmits<{
  (e: 'click', event: MouseEvent): void;
}>();

const onClick = (event: MouseEvent) => emit('click', event);
</script>
""",
    f"{VUE}/button/MButton.stories.ts": """import MButton from './MButton.vue';

export default {
  title: 'Action/Button',
  component: MButton,
};

const Template = (args) => ({
  components: { MButton },
  setup() { return { args }; },
  template: `<MButton v-bind="args" />`,
});

export const Default = Template.bind({});
Default.args = { label: 'Button' };

export const Large = Template.bind({});
Large.args = {
  label: 'Large button',
  size: 'l',
};
""",
    f"{VUE}/modal/index.vue": """<template>
  <div class="mc-modal">
    <slot name="header"></slot>
    <slot></slot>
  </div>
</template>

<script>
export default {
  name: 'MModal',
  props: {
    open: { type: Boolean, default: false },
    size: {
      type: String,
      default: 'm',
      validator: (value) => ['s', 'm', 'l'].includes(value),
    },
    title: String,
  },
  emits: ['update:open', 'close'],
  methods: {
    close() { this.$emit('close'); },
  },
};
</script>
""",
    # ------------------------------------------------------------------ react
    f"{REACT}/Button/Button.tsx": """import React from 'react';
import type { IButtonProps } from './Button.types';

const BASE_CLASS = 'mc-button';

export const Button = ({ size = 'm', children, onClick, ...props }: IButtonProps) => (
  <button className={BASE_CLASS} data-size={size} onClick={onClick} {...props}>
    {children}
  </button>
);
""",
    f"{REACT}/Button/Button.types.ts": """import { ReactNode, ButtonHTMLAttributes } from 'react';

export const size = ['s', 'm', 'l'] as const;
export type TButtonSize = (typeof size)[number];

export interface IBase {
  /** Identifier */
  id?: string;
}

export interface IButtonProps extends IBase, Omit<ButtonHTMLAttributes<HTMLButtonElement>, 'onClick'> {
  size?: TButtonSize;
  variant: 'solid' | 'bordered';
  children?: ReactNode;
  className?: string;
  onClick?: (event: React.MouseEvent<HTMLButtonElement>) => void;
}
""",
    f"{REACT}/Button/stories/Button.stories.tsx": """import type { Meta, StoryObj } from '@storybook/react';
import { Button } from '../Button';

const meta: Meta<typeof Button> = { title: 'Action/Button', component: Button };
export default meta;

type Story = StoryObj<typeof Button>;

export const Default: Story = {
  args: { children: 'Button' },
};

export const Bordered: Story = {
  args: {
    variant: 'bordered',
    children: 'Bordered',
  },
};
""",
    f"{REACT}/Tag/index.tsx": """interface TagProps {
  /** Visual size */
  size?: 's' | 'm';
  label: string;
  onRemove?: () => void;
}

export default function Tag({ size = 'm', label, onRemove }: TagProps) {
  return <span className="mc-tag">{label}</span>;
}
""",
    # ------------------------------------------------------------------ docs
    f"{DOCS}/getting-started.md": """---
title: Getting started
---
# Welcome

Install the tokens package and import the styles.
""",
    f"{DOCS}/Components/Modal/index.mdx": """import { Meta } from '@storybook/blocks';

# Modal

Use the MModal component to interrupt the user. Focus is trapped inside the modal while it is open.

<Callout>Close the modal with the escape key.</Callout>

Apply `mc-modal--s` for a small dialog.
""",
    f"{DOCS}/foundations/colors.md": """# Colors

Primary colors come from the color tokens.
""",
    # ------------------------------------------------------------------ icons
    ICONS: """export const ArrowArrowBottom16 = {
  viewBox: "0 0 16 16",
  paths: [{ tagName: "path", attrs: { d: "M8 11 3 6h10z" } }],
  type: "navigation",
  iconName: "ArrowArrowBottom16",
};
export const ArrowArrowBottom24 = {
  viewBox: "0 0 24 24",
  paths: [{ tagName: "path", attrs: { d: "M12 16 5 9h14z" } }],
  type: "navigation",
  iconName: "ArrowArrowBottom24",
};
export const MediaCamera32 = {
  viewBox: "0 0 32 32",
  paths: [{ tagName: "g", attrs: {}, children: [{ tagName: "circle", attrs: { cx: "16", cy: "16", r: "6" } }] }],
  type: "media",
  iconName: "MediaCamera32",
};
export const iconsVersion = "1.0.0";
""",
}

# Rows the full fixture produces per table
EXPECTED_COUNTS = {
    "tokens": 31,
    "token_properties": 5,
    "components": 4,
    "css_utilities": 6,
    "documentation": 3,
    "icons": 3,
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def memory_source():
    """The design system fixture served from memory."""
    return MemoryFileSource(DESIGN_SYSTEM)


@pytest.fixture
def design_system(tmp_path):
    """The design system fixture written under a temporary project root."""
    return write_tree(tmp_path, DESIGN_SYSTEM)


@pytest.fixture
def db_manager():
    """DatabaseManager over a fresh in-memory store with the full schema."""
    conn = sqlite3.connect(":memory:")
    manager = create_database_schema(conn, batch_size=50)
    yield manager
    conn.close()
