"""Starter stylesheet (Sass indented syntax) for the classes the theme scripts toggle."""

STARTER_SASS = r"""
$bg: #fff
$fg: #333
$accent: #2a7ae2
$header-height: 80px
$header-shrunk: 50px
$sidebar-width: 260px

body
  margin: 0
  color: $fg
  background: $bg
  font-family: -apple-system, "Helvetica Neue", Arial, sans-serif
  &.search-overlay
    overflow: hidden

a
  color: $accent

header
  position: fixed
  top: 0
  left: 0
  right: 0
  height: $header-height
  background: $bg
  transition: height .2s ease
  &.header-shrink
    height: $header-shrunk

.collapse
  display: none

#sidebar
  position: fixed
  top: 0
  bottom: 0
  left: -$sidebar-width
  width: $sidebar-width
  transition: left .3s ease
  &.slide
    left: 0

#fade
  display: none
  &.slide
    display: block
    position: fixed
    top: 0
    right: 0
    bottom: 0
    left: 0
    background: rgba(0, 0, 0, .4)

#close
  display: none

.search-wrapper, .search-form
  display: none
  &.active
    display: block

#recent
  h2, p
    overflow: hidden
"""
