"""
Client-side copy of the visibility comparison rules.

`MATCHES_CONDITION_JS` reimplements `form_builder.visibility.coercion` (same
coercion table, same "absent source value => hidden" rule) and is embedded in
both the generated component and the standalone document.
"""

from __future__ import annotations

MATCHES_CONDITION_JS = r"""var DECIMAL_RE = /^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$/;

function isFileValue(value) {
  if (typeof File !== "undefined" && value instanceof File) return true;
  if (Array.isArray(value)) {
    return value.every(function (item) {
      return typeof File !== "undefined" && item instanceof File;
    });
  }
  return false;
}

function toText(value) {
  if (typeof value === "boolean") return value ? "true" : "false";
  if (typeof value === "number") return String(value);
  if (typeof File !== "undefined" && value instanceof File) return value.name;
  if (Array.isArray(value)) return value.map(toText).join(",");
  return value === undefined || value === null ? "" : String(value);
}

function parseDecimal(text) {
  var t = String(text).trim();
  return DECIMAL_RE.test(t) ? parseFloat(t) : null;
}

function toNumber(value) {
  if (typeof value === "boolean") return value ? 1 : 0;
  if (typeof value === "number") return value;
  if (typeof value === "string") {
    if (!value.trim()) return 0;
    var n = parseDecimal(value);
    return n === null ? NaN : n;
  }
  return NaN;
}

function orderingNumber(value) {
  var n = null;
  if (typeof value === "boolean" || typeof value === "number") n = toNumber(value);
  else if (typeof value === "string") n = parseDecimal(value);
  return n !== null && isFinite(n) ? n : null;
}

function boolMatchesText(flag, text) {
  var t = text.trim().toLowerCase();
  if (t === "true" || t === "false") return (t === "true") === flag;
  return toNumber(text) === (flag ? 1 : 0);
}

function looseEquals(left, right) {
  if (left === undefined || left === null || right === undefined || right === null) {
    return (left === undefined || left === null) && (right === undefined || right === null);
  }
  var leftFile = isFileValue(left);
  var rightFile = isFileValue(right);
  if (leftFile || rightFile) {
    if (leftFile && rightFile) return left === right;
    var other = leftFile ? right : left;
    return typeof other === "string" && toText(leftFile ? left : right) === other;
  }
  if (typeof left === "string" && typeof right === "string") return left === right;
  if (typeof left === "boolean" && typeof right === "boolean") return left === right;
  if (typeof left === "boolean" && typeof right === "string") return boolMatchesText(left, right);
  if (typeof left === "string" && typeof right === "boolean") return boolMatchesText(right, left);
  return toNumber(left) === toNumber(right);
}

function compareOrdered(left, operator, right) {
  var a = orderingNumber(left);
  var b = orderingNumber(right);
  if (a === null || b === null) {
    a = toText(left);
    b = toText(right);
  }
  switch (operator) {
    case ">": return a > b;
    case "<": return a < b;
    case ">=": return a >= b;
    case "<=": return a <= b;
  }
  return false;
}

function matchesCondition(sourceValue, operator, operand) {
  // Absent source value (never touched, no default) hides the dependent field.
  if (sourceValue === undefined || sourceValue === null) return false;
  switch (operator) {
    case "==": return looseEquals(sourceValue, operand);
    case "!=": return !looseEquals(sourceValue, operand);
    case ">":
    case "<":
    case ">=":
    case "<=":
      return compareOrdered(sourceValue, operator, operand);
    case "contains": return toText(sourceValue).indexOf(toText(operand)) !== -1;
    case "startsWith": return toText(sourceValue).indexOf(toText(operand)) === 0;
    case "endsWith": {
      var s = toText(sourceValue);
      var suffix = toText(operand);
      return s.length >= suffix.length && s.slice(s.length - suffix.length) === suffix;
    }
  }
  return false;
}"""
